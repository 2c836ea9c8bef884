# backend/tests/conftest.py
"""
Pytest configuration.

Every test gets its own SQLite database file under ``tmp_path`` built from
the ORM metadata, so tests never share state and never touch a developer
or production database.
"""

import os
import sys

# Set test configuration BEFORE any careersync imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.setdefault("SECRET_KEY", "careersync-test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite:///./careersync_test_unused.db")

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, Iterator, List, Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from careersync.api.dependencies import get_db
from careersync.auth import create_access_token
from careersync.core.enums import RoleName
from careersync.database import Base, create_db_engine
from careersync.main import app
from careersync.models import AccUser, Mentor, Position, User
from careersync.schemas.timeslot import TimeslotWindow
from careersync.services.base import BaseService
from careersync.services.timeslot_service import TimeslotService
from tests.helpers.timeslots import SLOT_BASE


# ============================================================================
# DATABASE
# ============================================================================


@pytest.fixture
def test_engine(tmp_path) -> Iterator[Engine]:
    engine = create_db_engine(f"sqlite:///{tmp_path / 'careersync_test.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(test_engine: Engine) -> sessionmaker:
    """Factory for extra sessions (e.g. one per thread in concurrency tests)."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False)


@pytest.fixture
def db(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(db: Session) -> Iterator[TestClient]:
    """Create a test client bound to the per-test database session."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture(autouse=True)
def _reset_service_metrics() -> Iterator[None]:
    yield
    BaseService._class_metrics.clear()


# ============================================================================
# PEOPLE
# ============================================================================


@pytest.fixture
def position(db: Session) -> Position:
    position = Position(position_name="Software Engineer")
    db.add(position)
    db.commit()
    return position


@pytest.fixture
def make_mentor(db: Session, position: Position) -> Callable[..., Mentor]:
    counter = {"n": 0}

    def _make(
        first_name: str = "Grace",
        last_name: str = "Hopper",
        session_rate: Optional[Decimal] = Decimal("60"),
        meeting_location: Optional[str] = "Online",
        with_position: bool = True,
    ) -> Mentor:
        counter["n"] += 1
        user = User(email=f"mentor{counter['n']}@example.com", role=RoleName.MENTOR.value)
        db.add(user)
        db.flush()
        mentor = Mentor(
            user_id=user.id,
            first_name=first_name,
            last_name=last_name,
            position_id=position.id if with_position else None,
            session_rate=session_rate,
            meeting_location=meeting_location,
        )
        db.add(mentor)
        db.commit()
        return mentor

    return _make


@pytest.fixture
def make_account(db: Session) -> Callable[..., AccUser]:
    counter = {"n": 0}

    def _make(first_name: str = "Ada", last_name: str = "Lovelace") -> AccUser:
        counter["n"] += 1
        user = User(email=f"account{counter['n']}@example.com", role=RoleName.ACCOUNT.value)
        db.add(user)
        db.flush()
        acc_user = AccUser(user_id=user.id, first_name=first_name, last_name=last_name)
        db.add(acc_user)
        db.commit()
        return acc_user

    return _make


@pytest.fixture
def test_mentor(make_mentor: Callable[..., Mentor]) -> Mentor:
    return make_mentor()


@pytest.fixture
def test_mentor_2(make_mentor: Callable[..., Mentor]) -> Mentor:
    return make_mentor(
        first_name="Alan",
        last_name="Turing",
        session_rate=Decimal("85"),
        meeting_location="Bletchley Park",
    )


@pytest.fixture
def test_account(make_account: Callable[..., AccUser]) -> AccUser:
    return make_account()


def _bearer(user_id: str) -> Dict[str, str]:
    token = create_access_token(data={"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_for() -> Callable[[str], Dict[str, str]]:
    """Bearer headers for an arbitrary user id."""
    return _bearer


@pytest.fixture
def mentor_headers(test_mentor: Mentor) -> Dict[str, str]:
    return _bearer(test_mentor.user_id)


@pytest.fixture
def mentor_2_headers(test_mentor_2: Mentor) -> Dict[str, str]:
    return _bearer(test_mentor_2.user_id)


@pytest.fixture
def account_headers(test_account: AccUser) -> Dict[str, str]:
    return _bearer(test_account.user_id)


# ============================================================================
# TIMESLOTS
# ============================================================================


@pytest.fixture
def slot_windows() -> Callable[..., List[TimeslotWindow]]:
    """Consecutive one-hour windows starting at ``start`` (2030-01-15 09:00 UTC by default)."""

    def _windows(count: int = 1, start: datetime = SLOT_BASE) -> List[TimeslotWindow]:
        return [
            TimeslotWindow(
                start_time=start + timedelta(hours=i),
                end_time=start + timedelta(hours=i + 1),
            )
            for i in range(count)
        ]

    return _windows


@pytest.fixture
def add_slots(db: Session, slot_windows) -> Callable[..., str]:
    """Add timeslots for a mentor through the service and return the session id."""

    def _add(
        mentor: Mentor,
        count: int = 1,
        session_id: Optional[str] = "auto-create",
        start: datetime = SLOT_BASE,
    ) -> str:
        result = TimeslotService(db).add_timeslots(
            mentor.user_id, session_id, slot_windows(count, start)
        )
        return result.session_id

    return _add
