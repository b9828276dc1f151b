from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from .base import BaseRepository, commit
from scootsupport.models.base import utcnow
from scootsupport.models.chat import Conversation, Message, ChatAnalytics

class ConversationRepository(BaseRepository[Conversation]):
    def __init__(self):
        super().__init__(Conversation)

    def get_owned(self, db: Session, conversation_id: int, user_id: str) -> Optional[Conversation]:
        return db.query(Conversation).filter(
            Conversation.id == conversation_id,
            Conversation.user_id == user_id
        ).first()

    def list_for_user(self, db: Session, user_id: str, limit: int = 20) -> List[Conversation]:
        return db.query(Conversation).filter(
            Conversation.user_id == user_id
        ).order_by(Conversation.updated_at.desc(), Conversation.id.desc()).limit(limit).all()

    def touch(self, db: Session, conversation: Conversation) -> Conversation:
        conversation.updated_at = utcnow()
        commit(db, conversation)
        return conversation

class MessageRepository(BaseRepository[Message]):
    def __init__(self):
        super().__init__(Message)

    def create_message(self, db: Session, conversation_id: int, content: str,
                       sender: str, file_url: str = None) -> Message:
        return self.create(db, {
            "conversation_id": conversation_id,
            "content": content,
            "sender": sender,
            "file_url": file_url
        })

    def get_recent(self, db: Session, conversation_id: int, limit: int) -> List[Message]:
        """Return the `limit` newest messages, oldest first."""
        rows = db.query(Message).filter(
            Message.conversation_id == conversation_id
        ).order_by(Message.created_at.desc(), Message.id.desc()).limit(limit).all()
        return list(reversed(rows))

    def get_all(self, db: Session, conversation_id: int) -> List[Message]:
        return db.query(Message).filter(
            Message.conversation_id == conversation_id
        ).order_by(Message.created_at.asc(), Message.id.asc()).all()

    def count(self, db: Session, conversation_id: int) -> int:
        return db.query(func.count(Message.id)).filter(
            Message.conversation_id == conversation_id
        ).scalar()

    def get_latest(self, db: Session, conversation_id: int) -> Optional[Message]:
        return db.query(Message).filter(
            Message.conversation_id == conversation_id
        ).order_by(Message.created_at.desc(), Message.id.desc()).first()

class AnalyticsRepository(BaseRepository[ChatAnalytics]):
    def __init__(self):
        super().__init__(ChatAnalytics)

    def log(self, db: Session, user_id: str, conversation_id: int, query_text: str,
            response_time_ms: int, file_processed: bool) -> ChatAnalytics:
        return self.create(db, {
            "user_id": user_id,
            "conversation_id": conversation_id,
            "query_text": query_text,
            "response_time_ms": response_time_ms,
            "file_processed": file_processed
        })

conversation_repository = ConversationRepository()
message_repository = MessageRepository()
analytics_repository = AnalyticsRepository()
