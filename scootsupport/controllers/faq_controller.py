from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from scootsupport.core.database import get_db
from scootsupport.core.security import require_admin
from scootsupport.models.user import AuthUser
from scootsupport.schemas.support import FAQCreate, FAQUpdate
from scootsupport.services.faq_service import faq_service
from scootsupport.utils.response import success_response

router = APIRouter(prefix="/faqs", tags=["faqs"])

@router.get("/public")
async def list_public_faqs(tag: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """Active FAQs for the chat widget's suggested questions."""
    return success_response(data=faq_service.list_active_faqs(db, tag=tag))

@router.get("/tags")
async def list_tags(admin: AuthUser = Depends(require_admin), db: Session = Depends(get_db)):
    return success_response(data=faq_service.list_tags(db))

@router.get("/tags/suggest")
async def suggest_tags(
    q: str = Query("", description="Partially typed tag"),
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return success_response(data=faq_service.suggest_tags(db, q))

@router.get("")
async def list_faqs(admin: AuthUser = Depends(require_admin), db: Session = Depends(get_db)):
    return success_response(data=faq_service.list_faqs(db))

@router.get("/{faq_id}")
async def get_faq(faq_id: int, admin: AuthUser = Depends(require_admin), db: Session = Depends(get_db)):
    return success_response(data=faq_service.get_faq(db, faq_id))

@router.post("")
async def create_faq(request: FAQCreate, admin: AuthUser = Depends(require_admin), db: Session = Depends(get_db)):
    return success_response(data=faq_service.create_faq(db, request), message="FAQ created successfully")

@router.put("/{faq_id}")
async def update_faq(
    faq_id: int,
    request: FAQUpdate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return success_response(data=faq_service.update_faq(db, faq_id, request), message="FAQ updated successfully")

@router.delete("/{faq_id}")
async def delete_faq(faq_id: int, admin: AuthUser = Depends(require_admin), db: Session = Depends(get_db)):
    faq_service.delete_faq(db, faq_id)
    return success_response(message="FAQ deleted successfully")
