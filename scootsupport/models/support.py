from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, JSON, ForeignKey
from .base import BaseModel, utcnow

class Order(BaseModel):
    __tablename__ = "orders"

    order_id = Column(String(40), unique=True, index=True, nullable=False)  # ORD-1721900000000-X7K2
    model = Column(String(100), nullable=False)
    status = Column(String(30), nullable=False, default="processing")
    user_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    order_date = Column(DateTime, default=utcnow, nullable=False)
    delivery_eta = Column(DateTime)

class FAQ(BaseModel):
    __tablename__ = "faqs"

    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    category = Column(String(50), nullable=False, default="general")
    is_active = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)

class EscalatedQuery(BaseModel):
    __tablename__ = "escalated_queries"

    user_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False)
    original_question = Column(Text, nullable=False)
    ai_response = Column(Text, nullable=False)
    file_url = Column(String(500))
    user_feedback = Column(Text)
    escalation_reason = Column(String(50), nullable=False, default="not_helpful")
    status = Column(String(20), nullable=False, default="pending")  # pending, in_progress, resolved
