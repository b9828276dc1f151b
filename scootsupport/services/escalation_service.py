import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from scootsupport.core.exceptions import ValidationException, NotFoundException, UnprocessableException
from scootsupport.models.base import utcnow
from scootsupport.models.user import AuthUser
from scootsupport.repositories.chat_repository import conversation_repository
from scootsupport.repositories.escalation_repository import escalation_repository
from scootsupport.schemas.support import EscalationCreate, EscalationResponse

logger = logging.getLogger("escalation_service")

ESCALATION_STATUSES = ("pending", "in_progress", "resolved")

class EscalationService:
    def submit_escalation(self, db: Session, user: AuthUser, request: EscalationCreate) -> Dict[str, Any]:
        if request.conversation_id is None or not request.original_question or not request.ai_response:
            raise ValidationException(
                "Missing required fields: conversationId, originalQuestion, and aiResponse are required"
            )

        conversation = conversation_repository.get_owned(db, request.conversation_id, user.id)
        if not conversation:
            raise NotFoundException("Conversation not found or access denied")

        query = escalation_repository.create(db, {
            "user_id": user.id,
            "conversation_id": conversation.id,
            "original_question": request.original_question,
            "ai_response": request.ai_response,
            "file_url": request.file_url or None,
            "user_feedback": request.user_feedback or None,
            "escalation_reason": request.escalation_reason or "not_helpful",
            "status": "pending"
        })

        logger.info(
            f"New escalated query {query.id} submitted by user {user.id} "
            f"(reason: {query.escalation_reason})"
        )
        return {
            "success": True,
            "queryId": query.id,
            "message": "Your query has been submitted for review. Our team will get back to you soon.",
            "timestamp": query.created_at
        }

    def list_escalations(self, db: Session, status: Optional[str] = None,
                         search: Optional[str] = None) -> List[EscalationResponse]:
        if status and status not in ESCALATION_STATUSES:
            raise ValidationException(f"Unknown status: {status}")
        rows = escalation_repository.search(db, status=status, search=search)
        return [EscalationResponse.model_validate(row) for row in rows]

    def update_escalation_status(self, db: Session, query_id: int, new_status: str) -> EscalationResponse:
        if new_status not in ESCALATION_STATUSES:
            raise UnprocessableException(
                f"Status must be one of: {', '.join(ESCALATION_STATUSES)}"
            )
        query = escalation_repository.get_by_id(db, query_id)
        if not query:
            raise NotFoundException("Escalated query not found")

        query = escalation_repository.update(db, query, {
            "status": new_status,
            "updated_at": utcnow()
        })
        return EscalationResponse.model_validate(query)

    def escalation_stats(self, db: Session) -> Dict[str, int]:
        counts = escalation_repository.count_by_status(db)
        stats = {status: counts.get(status, 0) for status in ESCALATION_STATUSES}
        stats["total"] = sum(counts.values())
        return stats

escalation_service = EscalationService()
