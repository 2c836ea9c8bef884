# backend/tests/unit/schemas/test_timeslot_schemas.py
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError
import pytest

from careersync.schemas.booking import BookingCreate
from careersync.schemas.session import SessionCreate, SessionUpdate
from careersync.schemas.timeslot import (
    TimeslotBatchCreate,
    TimeslotBatchResponse,
    TimeslotUpdate,
    TimeslotWindow,
)


class TestTimeslotWindow:
    def test_accepts_time_field_names(self):
        window = TimeslotWindow.model_validate(
            {"start_time": "2030-01-15T09:00:00Z", "end_time": "2030-01-15T10:00:00Z"}
        )
        assert window.start_time == datetime(2030, 1, 15, 9, tzinfo=timezone.utc)

    def test_accepts_date_field_names(self):
        window = TimeslotWindow.model_validate(
            {"start_date": "2030-01-15T09:00:00Z", "end_date": "2030-01-15T10:00:00Z"}
        )
        assert window.end_time == datetime(2030, 1, 15, 10, tzinfo=timezone.utc)

    def test_naive_values_are_utc(self):
        window = TimeslotWindow.model_validate(
            {"start_time": "2030-01-15T09:00:00", "end_time": "2030-01-15T10:00:00"}
        )
        assert window.start_time.tzinfo == timezone.utc
        assert window.start_time.hour == 9

    def test_offsets_are_converted_to_utc(self):
        window = TimeslotWindow.model_validate(
            {"start_time": "2030-01-15T09:00:00+02:00", "end_time": "2030-01-15T10:00:00+02:00"}
        )
        assert window.start_time == datetime(2030, 1, 15, 7, tzinfo=timezone.utc)
        assert window.start_time.utcoffset() == timedelta(0)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            TimeslotWindow.model_validate(
                {
                    "start_time": "2030-01-15T09:00:00Z",
                    "end_time": "2030-01-15T10:00:00Z",
                    "is_booked": True,
                }
            )

    def test_missing_end_rejected(self):
        with pytest.raises(ValidationError):
            TimeslotWindow.model_validate({"start_time": "2030-01-15T09:00:00Z"})


class TestTimeslotBatchCreate:
    def test_session_id_camel_case(self):
        batch = TimeslotBatchCreate.model_validate({"sessionId": "auto-create", "timeslots": []})
        assert batch.session_id == "auto-create"

    def test_session_id_optional(self):
        batch = TimeslotBatchCreate.model_validate({"timeslots": []})
        assert batch.session_id is None
        assert batch.timeslots == []

    def test_response_serializes_camel_case(self):
        body = TimeslotBatchResponse(added_count=3, session_id="abc").model_dump(by_alias=True)
        assert body == {"addedCount": 3, "sessionId": "abc"}


def test_timeslot_update_is_partial():
    update = TimeslotUpdate.model_validate({"end_date": "2030-01-15T11:00:00"})
    assert update.start_time is None
    assert update.end_time == datetime(2030, 1, 15, 11, tzinfo=timezone.utc)
    assert update.model_dump(exclude_unset=True) == {"end_time": update.end_time}


class TestBookingCreate:
    def test_requires_all_ids(self):
        with pytest.raises(ValidationError):
            BookingCreate.model_validate(
                {"schedule_timeslot_id": "a", "mentor_id": "b", "position_id": "c"}
            )

    def test_rejects_empty_ids(self):
        with pytest.raises(ValidationError):
            BookingCreate.model_validate(
                {"schedule_timeslot_id": "", "mentor_id": "b", "position_id": "c", "session_id": "d"}
            )


class TestSessionSchemas:
    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            SessionCreate.model_validate({"price": "-1", "location_name": "Online"})

    def test_update_tracks_only_set_fields(self):
        update = SessionUpdate.model_validate({"price": "75.50"})
        assert update.model_dump(exclude_unset=True) == {"price": update.price}
