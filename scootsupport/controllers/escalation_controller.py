from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from scootsupport.core.database import get_db
from scootsupport.core.security import get_current_user, require_admin
from scootsupport.models.user import AuthUser
from scootsupport.schemas.support import EscalationCreate, StatusUpdate
from scootsupport.services.escalation_service import escalation_service
from scootsupport.utils.response import success_response, to_jsonable

router = APIRouter(prefix="/escalations", tags=["escalations"])

@router.post("")
async def submit_escalation(
    request: EscalationCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return to_jsonable(escalation_service.submit_escalation(db, user, request))

@router.get("")
async def list_escalations(
    status: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return success_response(data=escalation_service.list_escalations(db, status=status, search=search))

@router.get("/stats")
async def escalation_stats(admin: AuthUser = Depends(require_admin), db: Session = Depends(get_db)):
    return success_response(data=escalation_service.escalation_stats(db))

@router.patch("/{query_id}")
async def update_escalation_status(
    query_id: int,
    request: StatusUpdate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    query = escalation_service.update_escalation_status(db, query_id, request.status)
    return success_response(data=query, message="Query status updated successfully")
