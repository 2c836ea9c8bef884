# backend/tests/integration/services/test_availability_query.py
"""A timeslot is listed as available exactly while it exists unbooked."""

from datetime import timedelta
from decimal import Decimal

from careersync.models import ScheduleTimeslot
from careersync.schemas.booking import BookingCreate
from careersync.schemas.session import SessionUpdate
from careersync.services import AvailabilityQueryService, BookingService, SessionService

from tests.helpers.timeslots import PAST_SLOT_BASE, SLOT_BASE


def _listed_slot_ids(db, **kwargs):
    result = AvailabilityQueryService(db).list_available_sessions(**kwargs)
    return {slot.id for session in result.sessions for slot in session.timeslots}


def test_empty_catalog(db):
    result = AvailabilityQueryService(db).list_available_sessions()

    assert result.count == 0
    assert result.sessions == []


def test_sessions_carry_mentor_position_and_slots(db, test_mentor, add_slots):
    session_id = add_slots(test_mentor, count=2)

    result = AvailabilityQueryService(db).list_available_sessions()

    assert result.count == 1
    session = result.sessions[0]
    assert session.id == session_id
    assert session.mentor.full_name == "Grace Hopper"
    assert session.position.position_name == "Software Engineer"
    assert session.price == Decimal("60")
    assert session.is_auto_provisioned is True
    assert [slot.start_time for slot in session.timeslots] == [
        SLOT_BASE,
        SLOT_BASE + timedelta(hours=1),
    ]


def test_allocated_slot_disappears(db, test_mentor, test_account, add_slots):
    session_id = add_slots(test_mentor, count=2)
    slots = db.query(ScheduleTimeslot).filter_by(session_id=session_id).all()
    taken = slots[0]

    BookingService(db).allocate(
        test_account.user_id,
        BookingCreate(
            schedule_timeslot_id=taken.id,
            mentor_id=test_mentor.id,
            position_id=test_mentor.position_id,
            session_id=session_id,
        ),
    )

    listed = _listed_slot_ids(db)
    assert taken.id not in listed
    assert listed == {slots[1].id}


def test_booked_flag_hides_slot(db, test_mentor, add_slots):
    session_id = add_slots(test_mentor, count=2)
    slot = db.query(ScheduleTimeslot).filter_by(session_id=session_id).first()
    slot.is_booked = True
    db.commit()

    assert slot.id not in _listed_slot_ids(db)
    assert len(_listed_slot_ids(db)) == 1


def test_unavailable_sessions_are_hidden(db, test_mentor, test_mentor_2, add_slots):
    hidden = add_slots(test_mentor)
    add_slots(test_mentor_2)
    SessionService(db).edit_session(
        test_mentor.user_id, hidden, SessionUpdate(is_available=False)
    )

    result = AvailabilityQueryService(db).list_available_sessions()

    assert [s.mentor.full_name for s in result.sessions] == ["Alan Turing"]


def test_past_slots_listed_unless_upcoming_only(db, test_mentor, add_slots):
    add_slots(test_mentor, count=1, start=PAST_SLOT_BASE)
    add_slots(test_mentor, count=1, start=SLOT_BASE)

    assert len(_listed_slot_ids(db)) == 2

    upcoming = AvailabilityQueryService(db).list_available_sessions(
        upcoming_only=True, now=SLOT_BASE - timedelta(days=1)
    )
    assert [slot.start_time for slot in upcoming.sessions[0].timeslots] == [SLOT_BASE]

    # The full listing is unaffected by the filtered load above
    assert len(_listed_slot_ids(db)) == 2
