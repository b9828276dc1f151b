from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from scootsupport.core.database import get_db
from scootsupport.core.security import get_current_user, get_token
from scootsupport.models.user import AuthUser
from scootsupport.schemas.auth import OtpRequest, OtpVerifyRequest, SignInRequest
from scootsupport.services.auth_service import auth_service
from scootsupport.utils.response import success_response, to_jsonable

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/otp/request")
async def request_otp(request: OtpRequest, db: Session = Depends(get_db)):
    """Send a 6-digit code by SMS. Unauthenticated: this is how a session starts."""
    return await auth_service.request_code(db, request.phone_number, request.is_admin_request)

@router.post("/otp/verify")
async def verify_otp(request: OtpVerifyRequest, db: Session = Depends(get_db)):
    return auth_service.verify_code(db, request.phone_number, request.otp, request.is_admin_request)

@router.post("/sign-in")
async def sign_in(request: SignInRequest, db: Session = Depends(get_db)):
    return to_jsonable(auth_service.sign_in(db, request.email, request.password))

@router.post("/sign-out")
async def sign_out(
    token: Optional[str] = Depends(get_token),
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    auth_service.sign_out(db, token)
    return {"success": True}

@router.get("/me")
async def me(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return success_response(data=auth_service.describe_user(db, user))
