import hashlib
import hmac
import logging
import re
import secrets
import string
from datetime import timedelta
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from scootsupport.core.config import settings
from scootsupport.core.exceptions import (
    ValidationException, InvalidOtpException, UnauthorizedException,
    ForbiddenException, NotFoundException
)
from scootsupport.models.base import utcnow
from scootsupport.models.user import AuthUser
from scootsupport.repositories.user_repository import (
    auth_user_repository, profile_repository, session_repository, otp_repository
)
from scootsupport.schemas.auth import AuthUserInfo
from scootsupport.services.sms_service import sms_service

logger = logging.getLogger("auth_service")

OTP_LENGTH = 6
OTP_PATTERN = re.compile(r"^\d{6}$")

def generate_otp_code(length: int = OTP_LENGTH) -> str:
    return "".join(secrets.choice(string.digits) for _ in range(length))

def hash_otp_code(phone_number: str, code: str) -> str:
    return hashlib.sha256(f"{phone_number}:{code}:{settings.secret_key}".encode("utf-8")).hexdigest()

def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()

def phone_to_email(phone_number: str) -> str:
    """Synthetic login email for a phone number: its digits at the phone domain."""
    digits = re.sub(r"[^0-9]", "", phone_number)
    return f"{digits}@{settings.phone_email_domain}"

def is_admin_phone(phone_number: Optional[str]) -> bool:
    return bool(phone_number) and phone_number in settings.admin_phones

class AuthService:
    """
    Phone-number login bridged onto email/password identities.

    A phone number is turned into an AuthUser keyed by a synthetic email;
    after a code is verified the identity's password is set to the shared
    sign-in password and the client signs in with the returned email.
    """

    async def request_code(self, db: Session, phone_number: Optional[str],
                           is_admin_request: bool = False) -> Dict[str, Any]:
        phone_number = (phone_number or "").strip()
        if not phone_number:
            raise ValidationException("Phone number is required")

        if is_admin_request and not is_admin_phone(phone_number):
            logger.warning(f"Admin code requested for non-admin phone {phone_number}")
            raise ForbiddenException("Unauthorized: Admin access denied for this phone number")

        code = generate_otp_code()
        message = f"Your verification code is: {code}. Valid for {settings.otp_ttl_minutes} minutes."
        await sms_service.send_sms(phone_number, message)

        # Stored only once delivered; the previous code stays valid if sending fails
        expires_at = utcnow() + timedelta(minutes=settings.otp_ttl_minutes)
        otp_repository.issue(db, phone_number, hash_otp_code(phone_number, code), expires_at)

        result = {"success": True, "message": "OTP sent successfully"}
        # Only echo the code outside production
        if not settings.is_production:
            result["otp"] = code
        return result

    def _check_code(self, db: Session, phone_number: str, code: str):
        if settings.otp_demo_mode:
            return

        pending = otp_repository.get_latest_pending(db, phone_number)
        if not pending:
            raise InvalidOtpException()

        if pending.attempts >= settings.otp_max_attempts:
            otp_repository.update(db, pending, {"used": True})
            raise InvalidOtpException("Too many attempts, request a new code")

        if not hmac.compare_digest(pending.code_hash, hash_otp_code(phone_number, code)):
            otp_repository.update(db, pending, {"attempts": pending.attempts + 1})
            raise InvalidOtpException()

        otp_repository.update(db, pending, {"used": True})

    def _find_or_create_identity(self, db: Session, phone_number: str) -> AuthUser:
        profile = profile_repository.get_by_phone(db, phone_number)
        if profile:
            user = auth_user_repository.get_by_id(db, profile.user_id)
            if not user:
                raise NotFoundException("User account not found for this phone number")
            return user

        email = phone_to_email(phone_number)
        user = auth_user_repository.get_by_email(db, email)
        if not user:
            user = auth_user_repository.create_user(
                db, email, secrets.token_urlsafe(32), phone_number=phone_number
            )
            logger.info(f"Created account {user.id} for {phone_number}")

        if not profile_repository.get_by_user_id(db, user.id):
            profile_repository.create(db, {
                "user_id": user.id,
                "phone_number": phone_number,
                "display_name": phone_number
            })
        return user

    def _resolve_identity(self, db: Session, phone_number: str) -> AuthUser:
        """Find or create the identity and allow one sign-in with the shared password."""
        user = self._find_or_create_identity(db, phone_number)
        until = utcnow() + timedelta(minutes=settings.sign_in_window_minutes)
        return auth_user_repository.open_sign_in(db, user, settings.otp_shared_password, until)

    def verify_code(self, db: Session, phone_number: Optional[str], code: Optional[str],
                    is_admin_request: bool = False) -> Dict[str, Any]:
        phone_number = (phone_number or "").strip()
        code = (code or "").strip()
        if not phone_number or not code:
            raise ValidationException("Phone number and OTP are required")

        if is_admin_request and not is_admin_phone(phone_number):
            raise ForbiddenException("Unauthorized: Admin access denied for this phone number")

        if not OTP_PATTERN.match(code):
            raise InvalidOtpException()

        self._check_code(db, phone_number, code)
        user = self._resolve_identity(db, phone_number)

        if is_admin_request:
            profile = profile_repository.get_by_user_id(db, user.id)
            if not profile or not is_admin_phone(profile.phone_number):
                raise ForbiddenException()

        return {
            "success": True,
            "message": "OTP verified successfully",
            "user": AuthUserInfo(
                id=user.id,
                phone=phone_number,
                email=user.email,
                isAdmin=is_admin_phone(phone_number)
            ).model_dump(),
            "shouldSignIn": True
        }

    def sign_in(self, db: Session, email: str, password: str) -> Dict[str, Any]:
        user = auth_user_repository.get_by_email(db, email)
        if not user or not user.check_password(password):
            raise UnauthorizedException("Invalid login credentials")
        if not user.sign_in_allowed_until or user.sign_in_allowed_until <= utcnow():
            raise UnauthorizedException("Verify your phone number before signing in")

        token = secrets.token_urlsafe(32)
        expires_at = utcnow() + timedelta(hours=settings.session_ttl_hours)
        session_repository.create(db, {
            "user_id": user.id,
            "token_hash": hash_token(token),
            "expires_at": expires_at
        })
        auth_user_repository.close_sign_in(db, user)
        return {
            "accessToken": token,
            "tokenType": "bearer",
            "expiresAt": expires_at,
            "user": self.describe_user(db, user)
        }

    def sign_out(self, db: Session, token: str) -> bool:
        return session_repository.delete_by_hash(db, hash_token(token)) > 0

    def resolve_user(self, db: Session, token: Optional[str]) -> AuthUser:
        if not token:
            raise UnauthorizedException("No authorization header")
        session = session_repository.get_active(db, hash_token(token))
        if not session:
            raise UnauthorizedException()
        user = auth_user_repository.get_by_id(db, session.user_id)
        if not user:
            raise UnauthorizedException()
        return user

    def is_admin(self, db: Session, user: AuthUser) -> bool:
        profile = profile_repository.get_by_user_id(db, user.id)
        return profile is not None and is_admin_phone(profile.phone_number)

    def describe_user(self, db: Session, user: AuthUser) -> Dict[str, Any]:
        profile = profile_repository.get_by_user_id(db, user.id)
        phone = profile.phone_number if profile else user.phone_number
        return AuthUserInfo(
            id=user.id,
            phone=phone,
            email=user.email,
            isAdmin=is_admin_phone(phone) if profile else False
        ).model_dump()

auth_service = AuthService()
