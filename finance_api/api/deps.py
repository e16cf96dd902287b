# finance_api/api/deps.py
import uuid
from typing import Optional

import jwt
from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.core.config import settings
from finance_api.core.database import get_async_session
from finance_api.core.errors import AppError
from finance_api.core.security import decode_access_token
from finance_api.crud.user import get_user_by_id
from finance_api.models.user import User

# Shows the Bearer scheme in the docs without rejecting cookie-only requests
optional_security = HTTPBearer(auto_error=False)

def _invalid_token(message: str = "Invalid token. Please log in again.") -> AppError:
    return AppError(message, status.HTTP_401_UNAUTHORIZED, "INVALID_TOKEN")

def get_token_from_request(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """Authorization header first, then the auth cookie."""
    if credentials and credentials.credentials:
        return credentials.credentials
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None

async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> User:
    token = get_token_from_request(request, credentials)
    if not token:
        raise AppError("Not authorized. Please log in.", status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED")

    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise AppError("Token expired. Please log in again.", status.HTTP_401_UNAUTHORIZED, "TOKEN_EXPIRED")
    except jwt.InvalidTokenError:
        raise _invalid_token()

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        raise _invalid_token()

    user = await get_user_by_id(user_id, db)
    if not user:
        raise _invalid_token("User no longer exists")
    return user
