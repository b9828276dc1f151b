from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from scootsupport.core.database import get_db
from scootsupport.core.security import get_current_user, require_admin
from scootsupport.models.user import AuthUser
from scootsupport.schemas.support import OrderCreate, StatusUpdate
from scootsupport.services.order_service import order_service
from scootsupport.utils.response import success_response, to_jsonable

router = APIRouter(prefix="/orders", tags=["orders"])

@router.post("")
async def place_order(
    request: OrderCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    order = order_service.place_order(db, user, request.model, request.delivery_eta)
    return success_response(data=order, message="Order placed successfully")

@router.get("")
async def list_orders(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"orders": to_jsonable(order_service.list_orders(db, user))}

@router.get("/all")
async def list_all_orders(
    search: Optional[str] = Query(None),
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    return success_response(data=order_service.list_all_orders(db, search=search))

@router.get("/track/{order_id}")
async def track_order(order_id: str, user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return success_response(data=order_service.find_order(db, user, order_id))

@router.patch("/{id}")
async def update_order_status(
    id: int,
    request: StatusUpdate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db)
):
    order = order_service.update_order_status(db, id, request.status)
    return success_response(data=order, message="Order status updated successfully")
