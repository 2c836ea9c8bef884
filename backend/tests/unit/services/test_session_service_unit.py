# backend/tests/unit/services/test_session_service_unit.py
"""SessionService helpers and default-session resolution, with repositories mocked."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock, Mock

import pytest

from careersync.core.exceptions import (
    NotFoundException,
    PreconditionFailedException,
    ServiceException,
)
from careersync.models.mentor import Mentor
from careersync.services.session_service import SessionService, build_map_url


@pytest.fixture
def service() -> SessionService:
    svc = SessionService.__new__(SessionService)
    svc.db = MagicMock()
    svc.logger = Mock()
    svc.repository = Mock()
    svc.mentor_repository = Mock()
    svc.position_repository = Mock()
    return svc


def _mentor(**overrides) -> Mentor:
    fields = dict(
        id="01MENTOR00000000000000000A",
        user_id="01USER0000000000000000000A",
        first_name="Grace",
        last_name="Hopper",
        position_id="01POSITION000000000000000A",
        session_rate=Decimal("60"),
        meeting_location="Online",
    )
    fields.update(overrides)
    return Mentor(**fields)


class TestBuildMapUrl:
    def test_plain_word(self):
        assert build_map_url("Online") == "https://maps.google.com/?q=Online"

    def test_spaces_and_reserved_characters_are_escaped(self):
        assert (
            build_map_url("Cafe & Co, 5th Ave")
            == "https://maps.google.com/?q=Cafe%20%26%20Co%2C%205th%20Ave"
        )

    def test_unreserved_marks_kept(self):
        assert build_map_url("Joe's (main)") == "https://maps.google.com/?q=Joe's%20(main)"


class TestIsAutoRequest:
    @pytest.mark.parametrize("value", [None, "", "   ", "auto-create"])
    def test_auto_values(self, service, value):
        assert service.is_auto_request(value) is True

    def test_explicit_id(self, service):
        assert service.is_auto_request("01HZX0000000000000000000AB") is False


class TestDefaultsFromProfile:
    def test_uses_profile_values(self, service):
        defaults = service._defaults_for(_mentor(session_rate=Decimal("75"), meeting_location="Cafe"))
        assert defaults["price"] == Decimal("75")
        assert defaults["location_name"] == "Cafe"
        assert defaults["location_map_url"] == "https://maps.google.com/?q=Cafe"
        assert defaults["is_available"] is True

    @pytest.mark.parametrize("rate", [None, Decimal("0")])
    def test_missing_rate_falls_back_to_60(self, service, rate):
        assert service._defaults_for(_mentor(session_rate=rate))["price"] == Decimal("60")

    @pytest.mark.parametrize("location", [None, "", "  "])
    def test_missing_location_falls_back_to_online(self, service, location):
        assert service._defaults_for(_mentor(meeting_location=location))["location_name"] == "Online"


class TestFindOrAutoCreate:
    def test_explicit_session_must_be_owned(self, service):
        service.repository.get_for_mentor.return_value = None
        with pytest.raises(NotFoundException) as exc_info:
            service.find_or_auto_create(_mentor(), "01HZX0000000000000000000AB")
        assert exc_info.value.message == "Session not found or not yours"
        service.repository.create_auto_provisioned.assert_not_called()

    def test_existing_default_session_is_reused(self, service):
        existing = Mock()
        service.repository.get_auto_provisioned.return_value = existing
        assert service.find_or_auto_create(_mentor(), "auto-create") is existing
        service.repository.create_auto_provisioned.assert_not_called()

    def test_missing_position_is_precondition_failure(self, service):
        service.repository.get_auto_provisioned.return_value = None
        with pytest.raises(PreconditionFailedException):
            service.find_or_auto_create(_mentor(position_id=None), None)
        service.repository.create_auto_provisioned.assert_not_called()

    def test_lost_insert_race_reuses_winner(self, service):
        winner = Mock()
        service.repository.get_auto_provisioned.side_effect = [None, winner]
        service.repository.create_auto_provisioned.return_value = None
        assert service.find_or_auto_create(_mentor(), None) is winner

    def test_lost_race_without_winner_is_service_error(self, service):
        service.repository.get_auto_provisioned.return_value = None
        service.repository.create_auto_provisioned.return_value = None
        with pytest.raises(ServiceException):
            service.find_or_auto_create(_mentor(), None)

    def test_malformed_explicit_id_skips_lookup(self, service):
        with pytest.raises(NotFoundException):
            service.find_or_auto_create(_mentor(), "not-a-session-id")
        service.repository.get_for_mentor.assert_not_called()
