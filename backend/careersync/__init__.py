"""CareerSync booking core: mentors publish sessions and timeslots, requesters book them."""

__version__ = "0.1.0"
