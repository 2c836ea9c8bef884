# backend/careersync/auth.py
"""
Bearer token helpers.

Tokens are issued by the account service; this module verifies them and
can mint tokens for internal callers and tests. The ``sub`` claim is the
``User.id``.
"""

from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
import jwt
from jwt import PyJWTError

from .core.config import settings

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT.

    Args:
        data: Claims to encode (must include ``sub``)
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        The encoded token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode, settings.secret_key.get_secret_value(), algorithm=settings.algorithm
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """Verify signature and expiry. Raises PyJWTError on any failure."""
    payload: Dict[str, Any] = jwt.decode(
        token, settings.secret_key.get_secret_value(), algorithms=[settings.algorithm]
    )
    return payload


async def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> str:
    """
    Dependency returning the ``sub`` claim of a valid bearer token.

    Raises:
        HTTPException: 401 when the token is missing, invalid or expired
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    invalid_credentials = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
    except PyJWTError as e:
        logger.info(f"JWT validation error: {str(e)}")
        raise invalid_credentials from e

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise invalid_credentials
    return subject
