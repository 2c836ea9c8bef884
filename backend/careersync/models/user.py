# backend/careersync/models/user.py
"""
Identity and requester profile models.

A ``User`` is what a bearer token identifies. Requesters carry an
``AccUser`` profile, mentors a ``Mentor`` profile (see mentor.py).
"""

import logging

from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, String
from sqlalchemy.orm import relationship

from ..core.enums import RoleName
from ..core.ulid_helper import generate_ulid
from ..database import Base
from .types import UTCDateTime, utcnow

logger = logging.getLogger(__name__)


class User(Base):
    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default=RoleName.ACCOUNT.value)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    acc_user = relationship("AccUser", back_populates="user", uselist=False)
    mentor = relationship("Mentor", back_populates="user", uselist=False)

    __table_args__ = (
        CheckConstraint("role IN ('account', 'mentor', 'admin')", name="ck_users_role"),
    )

    @property
    def is_mentor(self) -> bool:
        return bool(self.role == RoleName.MENTOR.value)

    @property
    def is_account(self) -> bool:
        return bool(self.role == RoleName.ACCOUNT.value)

    def __repr__(self) -> str:
        return f"<User {self.email} role={self.role}>"


class AccUser(Base):
    """Profile of a requester, the person who books timeslots."""

    __tablename__ = "acc_users"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    user_id = Column(
        String(26), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    created_at = Column(UTCDateTime(), nullable=False, default=utcnow)

    user = relationship("User", back_populates="acc_user")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<AccUser {self.id} {self.full_name}>"
