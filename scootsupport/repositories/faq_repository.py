from typing import List
from sqlalchemy.orm import Session
from .base import BaseRepository
from scootsupport.models.support import FAQ

class FAQRepository(BaseRepository[FAQ]):
    def __init__(self):
        super().__init__(FAQ)

    def list_ordered(self, db: Session, active_only: bool = False) -> List[FAQ]:
        query = db.query(FAQ)
        if active_only:
            query = query.filter(FAQ.is_active.is_(True))
        return query.order_by(FAQ.display_order.asc(), FAQ.created_at.asc(), FAQ.id.asc()).all()

faq_repository = FAQRepository()
