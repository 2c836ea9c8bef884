"""Enumerations shared across layers."""

from enum import Enum


class RoleName(str, Enum):
    """Account roles carried on ``User.role``."""

    ACCOUNT = "account"
    MENTOR = "mentor"
    ADMIN = "admin"
