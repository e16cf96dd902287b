# finance_api/api/v1/routes/auth.py
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from finance_api.api.deps import get_current_user
from finance_api.api.responses import success
from finance_api.core.database import get_async_session
from finance_api.core.errors import AppError
from finance_api.core.google_auth import verify_google_credential
from finance_api.core.security import (
    clear_auth_cookie,
    create_access_token,
    set_auth_cookie,
    verify_password,
)
from finance_api.crud.user import (
    create_google_user,
    create_local_user,
    get_user_by_email,
    get_user_by_google_id,
    link_google_account,
    reset_orphaned_balance,
)
from finance_api.models.user import User
from finance_api.schemas.user import GoogleAuthRequest, LoginRequest, RegisterRequest, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

def _session_response(response: Response, user: User, message: str) -> dict:
    """Issue a token, set it as the auth cookie and return it with the user."""
    token = create_access_token(str(user.id))
    set_auth_cookie(response, token)
    return success({"user": UserRead.model_validate(user), "token": token}, message)

@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    user_in: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
):
    if await get_user_by_email(user_in.email, db):
        raise AppError("Email already registered", status.HTTP_409_CONFLICT, "EMAIL_TAKEN")

    user = await create_local_user(user_in, db)
    logger.info(f"✅ Registered {user.email}")
    return _session_response(response, user, "Registration successful")

@router.post("/login")
async def login(
    credentials: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
):
    user = await get_user_by_email(credentials.email, db)
    if not user:
        logger.warning(f"Failed login for unknown email {credentials.email}")
        raise AppError("Invalid email or password", status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS")

    if user.auth_provider == "google" and not user.hashed_password:
        raise AppError(
            "This account uses Google Sign-In. Please continue with Google.",
            status.HTTP_400_BAD_REQUEST,
            "WRONG_AUTH_PROVIDER",
        )

    if not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Failed login for {user.email}: wrong password")
        raise AppError("Invalid email or password", status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS")

    user = await reset_orphaned_balance(user, db)
    logger.info(f"✅ {user.email} logged in")
    return _session_response(response, user, "Login successful")

@router.post("/google")
async def google_sign_in(
    body: GoogleAuthRequest,
    response: Response,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Sign in with a Google ID token. Existing accounts are matched by Google id,
    then by email (linking a password account); otherwise a new account is created.
    """
    claims = await verify_google_credential(body.credential)

    user = await get_user_by_google_id(claims["sub"], db)
    if not user:
        user = await get_user_by_email(claims["email"], db)
        if user:
            logger.info(f"🔗 Linking Google account to {user.email}")
            user = await link_google_account(user, claims, db)

    if user:
        user = await reset_orphaned_balance(user, db)
    else:
        user = await create_google_user(claims, db)
        logger.info(f"✅ Created Google account {user.email}")

    return _session_response(response, user, "Google sign-in successful")

@router.get("/me")
async def read_me(
    db: AsyncSession = Depends(get_async_session),
    user: User = Depends(get_current_user),
):
    user = await reset_orphaned_balance(user, db)
    return success({"user": UserRead.model_validate(user)})

@router.post("/refresh")
async def refresh_token(
    response: Response,
    user: User = Depends(get_current_user),
):
    return _session_response(response, user, "Token refreshed")

@router.post("/logout")
async def logout(response: Response):
    # No auth required: clearing a missing cookie is harmless
    clear_auth_cookie(response)
    return success(message="Logged out successfully")
