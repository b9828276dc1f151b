import logging
import time
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from scootsupport.core.config import settings
from scootsupport.core.exceptions import ValidationException, NotFoundException, ForbiddenException
from scootsupport.models.base import utcnow
from scootsupport.models.chat import Conversation, Message
from scootsupport.models.user import AuthUser
from scootsupport.repositories.chat_repository import (
    conversation_repository, message_repository, analytics_repository
)
from scootsupport.schemas.chat import DirectSaveRequest, MessageResponse
from scootsupport.services.openai_service import openai_service

logger = logging.getLogger("chat_service")

TITLE_LIMIT = 50

def make_title(message: str) -> str:
    """First 50 characters of the opening message, with an ellipsis if cut."""
    return message[:TITLE_LIMIT] + ("..." if len(message) > TITLE_LIMIT else "")

def to_chat_role(sender: str) -> str:
    return "user" if sender == "user" else "assistant"

class ChatService:
    def _get_or_create_conversation(self, db: Session, user: AuthUser,
                                    conversation_id: Optional[int], first_message: str) -> Conversation:
        if conversation_id is not None:
            conversation = conversation_repository.get_owned(db, conversation_id, user.id)
            if not conversation:
                raise NotFoundException("Conversation not found or access denied")
            return conversation
        return conversation_repository.create(db, {
            "user_id": user.id,
            "title": make_title(first_message)
        })

    def _context_for(self, messages: List[Message]) -> List[Dict[str, str]]:
        return [{"role": to_chat_role(m.sender), "content": m.content} for m in messages]

    async def process_message(
        self,
        db: Session,
        user: AuthUser,
        message: Optional[str],
        conversation_id: Optional[int] = None,
        file_context: Optional[str] = None
    ) -> Dict[str, Any]:
        if not message or not message.strip():
            raise ValidationException("Message is required")

        start_time = time.monotonic()

        # 1. Conversation and user message
        conversation = self._get_or_create_conversation(db, user, conversation_id, message)
        message_repository.create_message(db, conversation.id, message, "user")

        # 2. Context window; it already ends with the message just saved
        history = message_repository.get_recent(db, conversation.id, settings.chat_context_limit)
        context = self._context_for(history[:-1])

        # 3. Model call; a failure here leaves the user message in place
        bot_response = await openai_service.generate_response(
            user_message=message,
            context=context,
            file_context=file_context
        )

        # 4. Reply and telemetry
        message_repository.create_message(db, conversation.id, bot_response, "assistant")
        conversation_repository.touch(db, conversation)
        response_time_ms = int((time.monotonic() - start_time) * 1000)
        analytics_repository.log(
            db, user.id, conversation.id, message, response_time_ms, bool(file_context)
        )

        return {
            "response": bot_response,
            "conversationId": conversation.id
        }

    def save_exchange(self, db: Session, user: AuthUser, request: DirectSaveRequest) -> Dict[str, Any]:
        if not request.user_id or not request.question or not request.answer:
            raise ValidationException(
                "Missing required fields: userId, question, and answer are required"
            )
        if request.user_id != user.id:
            raise ForbiddenException("User ID mismatch")

        conversation = None
        if request.conversation_id is not None:
            conversation = conversation_repository.get_owned(db, request.conversation_id, user.id)
        if not conversation:
            conversation = conversation_repository.create(db, {
                "user_id": user.id,
                "title": make_title(request.question)
            })

        message_repository.create_message(
            db, conversation.id, request.question, "user", file_url=request.file_url
        )
        message_repository.create_message(db, conversation.id, request.answer, "assistant")
        analytics_repository.log(
            db, user.id, conversation.id, request.question, 0, bool(request.file_url)
        )
        conversation_repository.touch(db, conversation)

        return {
            "success": True,
            "conversationId": conversation.id,
            "timestamp": utcnow(),
            "message": "Chat interaction saved successfully"
        }

    def list_conversations(self, db: Session, user: AuthUser, limit: int = 20) -> List[Dict[str, Any]]:
        conversations = conversation_repository.list_for_user(db, user.id, limit=limit)
        result = []
        for conv in conversations:
            latest = message_repository.get_latest(db, conv.id)
            result.append({
                "id": conv.id,
                "title": conv.title,
                "created_at": conv.created_at,
                "updated_at": conv.updated_at,
                "latest_message": latest.content if latest else "",
                "message_count": message_repository.count(db, conv.id)
            })
        return result

    def get_messages(self, db: Session, user: AuthUser, conversation_id: int) -> List[MessageResponse]:
        conversation = conversation_repository.get_owned(db, conversation_id, user.id)
        if not conversation:
            raise NotFoundException("Conversation not found or access denied")
        return [
            MessageResponse.model_validate(m)
            for m in message_repository.get_all(db, conversation.id)
        ]

chat_service = ChatService()
