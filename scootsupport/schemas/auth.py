from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from .base import CamelRequest

class OtpRequest(CamelRequest):
    phone_number: Optional[str] = Field(None, alias="phoneNumber", description="E.164 phone number")
    is_admin_request: bool = Field(False, alias="isAdminRequest")

class OtpVerifyRequest(CamelRequest):
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    otp: Optional[str] = Field(None, description="6-digit code")
    is_admin_request: bool = Field(False, alias="isAdminRequest")

class SignInRequest(BaseModel):
    email: EmailStr
    password: str

class AuthUserInfo(BaseModel):
    id: str
    phone: Optional[str] = None
    email: str
    isAdmin: bool = False
