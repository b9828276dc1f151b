from sqlalchemy import Column, String, Integer, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel

class Conversation(BaseModel):
    __tablename__ = "conversations"

    user_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    title = Column(String(100), nullable=False)

    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan"
    )

class Message(BaseModel):
    __tablename__ = "messages"

    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    sender = Column(String(20), nullable=False)  # user, assistant
    file_url = Column(String(500))

    conversation = relationship("Conversation", back_populates="messages")

class ChatAnalytics(BaseModel):
    """Per-exchange telemetry, never read back by the API"""
    __tablename__ = "chat_analytics"

    user_id = Column(String(36), nullable=False)
    conversation_id = Column(Integer, nullable=False)
    query_text = Column(Text, nullable=False)
    response_time_ms = Column(Integer, nullable=False, default=0)
    file_processed = Column(Boolean, default=False)
