from datetime import datetime
from typing import Literal, Optional
from pydantic import Field
from .base import BaseSchema, CamelRequest

class ChatCompletionRequest(CamelRequest):
    type: Literal["completion"] = "completion"
    message: Optional[str] = Field(None, description="User message")
    conversation_id: Optional[int] = Field(None, alias="conversationId")
    file_context: Optional[str] = Field(None, alias="fileContext", description="Text extracted from an uploaded file")

class DirectSaveRequest(CamelRequest):
    """Already-answered question/answer pair saved without calling the model"""
    type: Literal["direct_save"]
    user_id: Optional[str] = Field(None, alias="userId")
    question: Optional[str] = None
    answer: Optional[str] = None
    file_url: Optional[str] = Field(None, alias="fileUrl")
    conversation_id: Optional[int] = Field(None, alias="conversationId")

class MessageResponse(BaseSchema):
    id: int
    conversation_id: int
    content: str
    sender: str
    file_url: Optional[str] = None
    created_at: datetime
