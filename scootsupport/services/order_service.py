import logging
import secrets
import string
import time
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from scootsupport.core.exceptions import ValidationException, NotFoundException
from scootsupport.models.base import utcnow
from scootsupport.models.support import Order
from scootsupport.models.user import AuthUser
from scootsupport.repositories.order_repository import order_repository
from scootsupport.schemas.support import OrderResponse

logger = logging.getLogger("order_service")

PROGRESS = {
    "processing": 33,
    "shipping": 66,
    "shipped": 66,
    "delivered": 100
}

def generate_order_id() -> str:
    """ORD-<epoch millis>-<4 random uppercase alphanumerics>"""
    suffix = "".join(secrets.choice(string.ascii_uppercase + string.digits) for _ in range(4))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"

def order_progress(status: str) -> int:
    return PROGRESS.get((status or "").lower(), 0)

def to_response(order: Order) -> OrderResponse:
    response = OrderResponse.model_validate(order)
    return response.model_copy(update={"progress": order_progress(order.status)})

class OrderService:
    def place_order(self, db: Session, user: AuthUser, model: str,
                    delivery_eta: Optional[datetime] = None) -> OrderResponse:
        if not model or not model.strip():
            raise ValidationException("Scooter model is required")
        if delivery_eta is not None and delivery_eta.tzinfo is not None:
            delivery_eta = delivery_eta.replace(tzinfo=None) - delivery_eta.utcoffset()

        order = order_repository.create(db, {
            "order_id": generate_order_id(),
            "model": model.strip(),
            "status": "processing",
            "user_id": user.id,
            "order_date": utcnow(),
            "delivery_eta": delivery_eta
        })
        logger.info(f"Order {order.order_id} placed by user {user.id}")
        return to_response(order)

    def list_orders(self, db: Session, user: AuthUser) -> List[OrderResponse]:
        return [to_response(o) for o in order_repository.list_for_user(db, user.id)]

    def find_order(self, db: Session, user: AuthUser, order_id: str) -> OrderResponse:
        order = order_repository.get_by_order_id(db, order_id.strip(), user_id=user.id)
        if not order:
            raise NotFoundException("Order not found")
        return to_response(order)

    def list_all_orders(self, db: Session, search: Optional[str] = None) -> List[OrderResponse]:
        return [to_response(o) for o in order_repository.list_all(db, search=search)]

    def update_order_status(self, db: Session, id: int, status: str) -> OrderResponse:
        if not status or not status.strip():
            raise ValidationException("Status is required")
        order = order_repository.get_by_id(db, id)
        if not order:
            raise NotFoundException("Order not found")
        order = order_repository.update(db, order, {
            "status": status.strip(),
            "updated_at": utcnow()
        })
        return to_response(order)

order_service = OrderService()
