from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from .base import BaseRepository, LIKE_ESCAPE, like_pattern
from scootsupport.models.support import Order

class OrderRepository(BaseRepository[Order]):
    def __init__(self):
        super().__init__(Order)

    def list_for_user(self, db: Session, user_id: str) -> List[Order]:
        return db.query(Order).filter(
            Order.user_id == user_id
        ).order_by(Order.order_date.desc(), Order.id.desc()).all()

    def get_by_order_id(self, db: Session, order_id: str, user_id: str = None) -> Optional[Order]:
        query = db.query(Order).filter(Order.order_id == order_id)
        if user_id:
            query = query.filter(Order.user_id == user_id)
        return query.first()

    def list_all(self, db: Session, search: str = None) -> List[Order]:
        query = db.query(Order)
        if search:
            pattern = like_pattern(search)
            query = query.filter(or_(
                Order.order_id.ilike(pattern, escape=LIKE_ESCAPE),
                Order.model.ilike(pattern, escape=LIKE_ESCAPE),
                Order.status.ilike(pattern, escape=LIKE_ESCAPE)
            ))
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

order_repository = OrderRepository()
