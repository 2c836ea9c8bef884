"""
API v1 routes, mounted under /api/v1.
"""

from . import bookings, sessions, timeslots

__all__ = ["bookings", "sessions", "timeslots"]
