import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from werkzeug.security import generate_password_hash, check_password_hash
from scootsupport.core.database import Base
from .base import BaseModel, utcnow

class AuthUser(Base):
    """Email/password identity behind every phone login"""
    __tablename__ = "auth_users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    phone_number = Column(String(20))  # copied from the profile at creation
    sign_in_allowed_until = Column(DateTime)  # set by a verified code, cleared by sign-in
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    profile = relationship("Profile", back_populates="user", uselist=False)

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

class Profile(BaseModel):
    __tablename__ = "profiles"

    user_id = Column(String(36), ForeignKey("auth_users.id"), unique=True, nullable=False)
    phone_number = Column(String(20), unique=True, index=True, nullable=False)
    display_name = Column(String(100))

    user = relationship("AuthUser", back_populates="profile")

class AuthSession(BaseModel):
    __tablename__ = "auth_sessions"

    user_id = Column(String(36), ForeignKey("auth_users.id"), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)

class OtpCode(BaseModel):
    __tablename__ = "otp_codes"

    phone_number = Column(String(20), index=True, nullable=False)
    code_hash = Column(String(64), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    attempts = Column(Integer, default=0, nullable=False)
    used = Column(Boolean, default=False, nullable=False)
