# backend/careersync/api/dependencies/database.py
"""
Database-related dependencies.
"""

from typing import Generator

from sqlalchemy.orm import Session

from ...database import get_db as original_get_db


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped database session.

    Tests override this dependency to point at their own engine.
    """
    yield from original_get_db()
