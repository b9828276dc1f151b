from typing import Dict, List
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from .base import BaseRepository, LIKE_ESCAPE, like_pattern
from scootsupport.models.support import EscalatedQuery

class EscalationRepository(BaseRepository[EscalatedQuery]):
    def __init__(self):
        super().__init__(EscalatedQuery)

    def search(self, db: Session, status: str = None, search: str = None) -> List[EscalatedQuery]:
        query = db.query(EscalatedQuery)
        if status:
            query = query.filter(EscalatedQuery.status == status)
        if search:
            pattern = like_pattern(search)
            query = query.filter(or_(
                EscalatedQuery.original_question.ilike(pattern, escape=LIKE_ESCAPE),
                EscalatedQuery.ai_response.ilike(pattern, escape=LIKE_ESCAPE),
                EscalatedQuery.user_feedback.ilike(pattern, escape=LIKE_ESCAPE)
            ))
        return query.order_by(EscalatedQuery.created_at.desc(), EscalatedQuery.id.desc()).all()

    def count_by_status(self, db: Session) -> Dict[str, int]:
        rows = db.query(EscalatedQuery.status, func.count(EscalatedQuery.id)).group_by(
            EscalatedQuery.status
        ).all()
        return {status: count for status, count in rows}

escalation_repository = EscalationRepository()
