# finance_api/core/google_auth.py
import asyncio
import logging
from typing import Dict

from fastapi import status
from google.auth.transport.requests import Request
from google.oauth2 import id_token

from .config import settings
from .errors import AppError

logger = logging.getLogger(__name__)

def _verify(credential: str) -> Dict:
    return id_token.verify_oauth2_token(credential, Request(), settings.GOOGLE_CLIENT_ID or None)

async def verify_google_credential(credential: str) -> Dict:
    """
    Verify a Google Sign-In ID token and return its claims
    (sub, email, email_verified, name, picture).
    """
    try:
        # google-auth fetches Google's certificates over blocking HTTP
        loop = asyncio.get_running_loop()
        claims = await loop.run_in_executor(None, _verify, credential)
    except ValueError as e:
        logger.warning(f"Rejected Google credential: {str(e)}")
        raise AppError("Invalid Google credential", status.HTTP_400_BAD_REQUEST, "INVALID_GOOGLE_CREDENTIAL")

    if not claims.get("email"):
        raise AppError("Email not provided by Google", status.HTTP_400_BAD_REQUEST, "INVALID_GOOGLE_CREDENTIAL")
    if not claims.get("email_verified"):
        raise AppError("Google email not verified", status.HTTP_400_BAD_REQUEST, "GOOGLE_EMAIL_NOT_VERIFIED")
    return claims
