from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from .base import BaseSchema, CamelRequest, TimestampMixin

# Orders
class OrderCreate(CamelRequest):
    model: str = Field(..., min_length=1, description="Scooter model name")
    delivery_eta: Optional[datetime] = Field(None, alias="deliveryEta")

class StatusUpdate(BaseModel):
    status: str = Field(..., min_length=1)

class OrderResponse(BaseSchema, TimestampMixin):
    id: int
    order_id: str
    model: str
    status: str
    user_id: str
    order_date: datetime
    delivery_eta: Optional[datetime] = None
    progress: int = 0

# FAQs
class FAQCreate(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None

class FAQUpdate(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = None

class FAQResponse(BaseSchema, TimestampMixin):
    id: int
    question: str
    answer: str
    tags: List[str] = Field(default_factory=list)
    category: str
    is_active: bool
    display_order: int

# Escalations
class EscalationCreate(CamelRequest):
    conversation_id: Optional[int] = Field(None, alias="conversationId")
    original_question: Optional[str] = Field(None, alias="originalQuestion")
    ai_response: Optional[str] = Field(None, alias="aiResponse")
    file_url: Optional[str] = Field(None, alias="fileUrl")
    user_feedback: Optional[str] = Field(None, alias="userFeedback")
    escalation_reason: Optional[str] = Field("not_helpful", alias="escalationReason")

class EscalationResponse(BaseSchema, TimestampMixin):
    id: int
    user_id: str
    conversation_id: int
    original_question: str
    ai_response: str
    file_url: Optional[str] = None
    user_feedback: Optional[str] = None
    escalation_reason: str
    status: str
