from pydantic import BaseModel
from datetime import datetime
from typing import Optional

class BaseSchema(BaseModel):
    class Config:
        from_attributes = True

class CamelRequest(BaseModel):
    """Request body accepting the frontend's camelCase names or snake_case."""
    class Config:
        populate_by_name = True

class TimestampMixin(BaseModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
