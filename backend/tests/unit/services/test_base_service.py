# backend/tests/unit/services/test_base_service.py
"""Unit tests for BaseService transaction handling and operation metrics."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from sqlalchemy.exc import OperationalError

from careersync.core.exceptions import (
    DatabaseBusyException,
    NotFoundException,
    RepositoryException,
    ServiceException,
)
from careersync.services.base import BaseService


class _DummyService(BaseService):
    @BaseService.measure_operation("do_work")
    def do_work(self, value: int) -> int:
        return value * 2

    @BaseService.measure_operation("fail_work")
    def fail_work(self) -> None:
        raise NotFoundException("missing")


@pytest.fixture
def service() -> _DummyService:
    svc = _DummyService(Mock())
    svc.reset_metrics()
    return svc


class TestTransaction:
    def test_commits_on_success(self, service):
        with service.transaction():
            pass
        service.db.commit.assert_called_once()
        service.db.rollback.assert_not_called()

    def test_sqlalchemy_error_becomes_service_exception(self, service):
        db_error = OperationalError("INSERT ...", {}, Exception("disk I/O error"))
        with pytest.raises(ServiceException) as exc_info:
            with service.transaction():
                raise db_error
        assert exc_info.value.__cause__ is db_error
        service.db.rollback.assert_called_once()
        service.db.commit.assert_not_called()

    def test_lock_timeout_becomes_busy(self, service):
        db_error = OperationalError("COMMIT", {}, Exception("database is locked"))
        with pytest.raises(DatabaseBusyException) as exc_info:
            with service.transaction():
                raise db_error
        assert exc_info.value.__cause__ is db_error
        assert exc_info.value.to_http_exception().status_code == 503
        service.db.rollback.assert_called_once()

    def test_lock_timeout_inside_repository_becomes_busy(self, service):
        repo_error = RepositoryException("Failed to create MentorSession")
        repo_error.__cause__ = OperationalError("INSERT", {}, Exception("database is locked"))
        with pytest.raises(DatabaseBusyException) as exc_info:
            with service.transaction():
                raise repo_error
        assert exc_info.value.__cause__ is repo_error
        service.db.rollback.assert_called_once()

    def test_other_repository_errors_propagate_unchanged(self, service):
        with pytest.raises(RepositoryException):
            with service.transaction():
                raise RepositoryException("Failed to bulk create")
        service.db.rollback.assert_called_once()

    def test_domain_errors_roll_back_and_propagate(self, service):
        with pytest.raises(NotFoundException):
            with service.transaction():
                raise NotFoundException("gone")
        service.db.rollback.assert_called_once()


class TestMeasureOperation:
    def test_records_success(self, service):
        assert service.do_work(21) == 42
        metrics = service.get_metrics()["do_work"]
        assert metrics["count"] == 1
        assert metrics["success_count"] == 1
        assert metrics["success_rate"] == 1.0

    def test_records_failure_and_reraises(self, service):
        with pytest.raises(NotFoundException):
            service.fail_work()
        metrics = service.get_metrics()["fail_work"]
        assert metrics["failure_count"] == 1
        assert metrics["success_rate"] == 0.0

    def test_marks_wrapped_function(self):
        assert _DummyService.do_work._operation_name == "do_work"
        assert _DummyService.do_work._is_measured is True

    def test_forwards_to_prometheus(self, service):
        with patch("careersync.services.base.prometheus_metrics") as prom:
            service.do_work(1)
        prom.record_service_operation.assert_called_once()
        kwargs = prom.record_service_operation.call_args.kwargs
        assert kwargs["service"] == "_DummyService"
        assert kwargs["operation"] == "do_work"
        assert kwargs["status"] == "success"

    def test_slow_operation_logs_warning(self, service):
        service.logger = Mock()
        with patch("careersync.services.base.time.time", side_effect=[0.0, 2.5]):
            service.do_work(1)
        service.logger.warning.assert_called_once()
        assert "Slow operation detected: do_work" in service.logger.warning.call_args.args[0]

    def test_context_manager_variant(self, service):
        with service.measure_operation_context("block"):
            pass
        assert service.get_metrics()["block"]["count"] == 1

    def test_reset_metrics(self, service):
        service.do_work(1)
        service.reset_metrics()
        assert service.get_metrics() == {}


def test_log_operation_attaches_context(service):
    service.logger = Mock()
    service.log_operation("allocate", booking_id="b1")
    service.logger.info.assert_called_once_with(
        "Operation: allocate", extra={"operation": "allocate", "booking_id": "b1"}
    )
