# backend/careersync/api/dependencies/auth.py
"""
Identity dependencies: resolve the bearer token to a ``User`` and check roles.
"""

import logging

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...auth import get_current_user_id
from ...models.user import User
from ...repositories.factory import RepositoryFactory
from .database import get_db

logger = logging.getLogger(__name__)


def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    """
    The authenticated, active user.

    Raises:
        HTTPException: 401 if the token names an unknown or inactive user
    """
    user = RepositoryFactory.create_user_repository(db).get_active(user_id)
    if not user:
        logger.info(f"Token subject {user_id} is unknown or inactive")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_mentor_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_mentor:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not a mentor")
    return current_user


async def get_current_account_user(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_account:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not an account user")
    return current_user
