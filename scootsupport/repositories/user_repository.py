import secrets
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from .base import BaseRepository, commit
from scootsupport.models.base import utcnow
from scootsupport.models.user import AuthUser, Profile, AuthSession, OtpCode

class AuthUserRepository(BaseRepository[AuthUser]):
    def __init__(self):
        super().__init__(AuthUser)

    def get_by_email(self, db: Session, email: str) -> Optional[AuthUser]:
        return db.query(AuthUser).filter(AuthUser.email == email).first()

    def create_user(self, db: Session, email: str, password: str, phone_number: str = None) -> AuthUser:
        user = AuthUser(email=email, phone_number=phone_number)
        user.set_password(password)
        db.add(user)
        commit(db, user)
        return user

    def open_sign_in(self, db: Session, user: AuthUser, password: str, until: datetime) -> AuthUser:
        user.set_password(password)
        user.sign_in_allowed_until = until
        commit(db, user)
        return user

    def close_sign_in(self, db: Session, user: AuthUser) -> AuthUser:
        user.set_password(secrets.token_urlsafe(32))
        user.sign_in_allowed_until = None
        commit(db, user)
        return user

class ProfileRepository(BaseRepository[Profile]):
    def __init__(self):
        super().__init__(Profile)

    def get_by_phone(self, db: Session, phone_number: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.phone_number == phone_number).first()

    def get_by_user_id(self, db: Session, user_id: str) -> Optional[Profile]:
        return db.query(Profile).filter(Profile.user_id == user_id).first()

class SessionRepository(BaseRepository[AuthSession]):
    def __init__(self):
        super().__init__(AuthSession)

    def get_active(self, db: Session, token_hash: str) -> Optional[AuthSession]:
        return db.query(AuthSession).filter(
            AuthSession.token_hash == token_hash,
            AuthSession.expires_at > utcnow()
        ).first()

    def delete_by_hash(self, db: Session, token_hash: str) -> int:
        count = db.query(AuthSession).filter(AuthSession.token_hash == token_hash).delete()
        commit(db)
        return count

class OtpRepository(BaseRepository[OtpCode]):
    def __init__(self):
        super().__init__(OtpCode)

    def issue(self, db: Session, phone_number: str, code_hash: str, expires_at: datetime) -> OtpCode:
        # A fresh code supersedes every earlier one for the same phone
        db.query(OtpCode).filter(
            OtpCode.phone_number == phone_number,
            OtpCode.used.is_(False)
        ).update({"used": True}, synchronize_session=False)
        return self.create(db, {
            "phone_number": phone_number,
            "code_hash": code_hash,
            "expires_at": expires_at
        })

    def get_latest_pending(self, db: Session, phone_number: str) -> Optional[OtpCode]:
        return db.query(OtpCode).filter(
            OtpCode.phone_number == phone_number,
            OtpCode.used.is_(False),
            OtpCode.expires_at > utcnow()
        ).order_by(OtpCode.created_at.desc(), OtpCode.id.desc()).first()

auth_user_repository = AuthUserRepository()
profile_repository = ProfileRepository()
session_repository = SessionRepository()
otp_repository = OtpRepository()
