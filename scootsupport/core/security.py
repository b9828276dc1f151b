from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from scootsupport.core.database import get_db
from scootsupport.core.exceptions import ForbiddenException
from scootsupport.models.user import AuthUser
from scootsupport.services.auth_service import auth_service

bearer_scheme = HTTPBearer(auto_error=False)

def get_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> Optional[str]:
    return credentials.credentials if credentials else None

# Dependency resolving the bearer token to the signed-in user
def get_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db)
) -> AuthUser:
    return auth_service.resolve_user(db, token)

# Dependency for staff-only routes
def require_admin(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> AuthUser:
    if not auth_service.is_admin(db, user):
        raise ForbiddenException()
    return user
