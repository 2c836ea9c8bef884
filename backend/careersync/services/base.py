# backend/careersync/services/base.py
"""
Base service pattern for the booking core.

Every service gets:
- transaction management (services own commit/rollback)
- a per-class logger
- operation timing, both in-process and exported to Prometheus
"""

from contextlib import contextmanager
from functools import wraps
import logging
from threading import Lock
import time
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import DatabaseBusyException, ServiceException, is_db_lock_contention
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SLOW_OPERATION_SECONDS = 1.0


class BaseService:
    """
    Base class for all service layer components.

    Subclasses receive a SQLAlchemy session and build their repositories
    from it through ``RepositoryFactory``.
    """

    # Class-level metrics storage, keyed by service class name
    _class_metrics: Dict[str, Dict[str, Dict[str, float]]] = {}
    _metrics_lock = Lock()

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Context manager for database transactions.

        Usage:
            with self.transaction():
                self.repository.create(...)
                # commit happens on exit

        SQLAlchemy errors are rolled back and re-raised as ServiceException
        with the original error chained. Lock contention, whether raised
        directly or wrapped by a repository, becomes DatabaseBusyException.
        Anything else is rolled back and re-raised unchanged.
        """
        try:
            yield self.db
            self.db.commit()
            self.logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self.db.rollback()
            if is_db_lock_contention(e):
                self.logger.warning(f"Transaction gave up waiting for a lock: {str(e)}")
                raise DatabaseBusyException() from e
            self.logger.error(f"Transaction failed: {str(e)}")
            raise ServiceException(f"Database operation failed: {str(e)}") from e
        except Exception as e:
            if not isinstance(e, DatabaseBusyException) and is_db_lock_contention(e):
                self.logger.warning(f"Transaction gave up waiting for a lock: {str(e)}")
                self.db.rollback()
                raise DatabaseBusyException() from e
            self.logger.debug(f"Rolling back transaction after {type(e).__name__}: {str(e)}")
            self.db.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure operation performance.

        Usage:
            @BaseService.measure_operation("allocate")
            def allocate(self, ...):
                ...
        """

        def decorator(func: F) -> F:
            func._operation_name = operation_name  # type: ignore[attr-defined]
            func._is_measured = True  # type: ignore[attr-defined]

            @wraps(func)
            def wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                start_time = time.time()
                success = False
                error_type: Optional[str] = None
                try:
                    result = func(self, *args, **kwargs)
                    success = True
                    return result
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    self._finish_measurement(
                        operation_name, time.time() - start_time, success, error_type
                    )

            return cast(F, wrapper)

        return decorator

    @contextmanager
    def measure_operation_context(self, operation_name: str) -> Iterator[None]:
        """Context-manager form of ``measure_operation`` for partial blocks."""
        start_time = time.time()
        success = False
        error_type: Optional[str] = None
        try:
            yield
            success = True
        except Exception as e:
            error_type = type(e).__name__
            raise
        finally:
            self._finish_measurement(operation_name, time.time() - start_time, success, error_type)

    def _finish_measurement(
        self, operation_name: str, elapsed: float, success: bool, error_type: Optional[str]
    ) -> None:
        self._record_metric(operation_name, elapsed, success)

        if elapsed > SLOW_OPERATION_SECONDS:
            self.logger.warning(f"Slow operation detected: {operation_name} took {elapsed:.2f}s")

        try:
            prometheus_metrics.record_service_operation(
                service=self.__class__.__name__,
                operation=operation_name,
                duration=elapsed,
                status="success" if success else "error",
                error_type=error_type,
            )
        except ValueError as e:
            # Collector label mismatches must not fail the business call
            self.logger.debug(f"Prometheus recording failed for {operation_name}: {e}")

    def log_operation(self, operation: str, **context: Any) -> None:
        """
        Log an operation with structured context.

        Args:
            operation: Operation name
            **context: Extra fields attached to the log record
        """
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})

    def _record_metric(self, operation: str, elapsed: float, success: bool) -> None:
        class_name = self.__class__.__name__
        with BaseService._metrics_lock:
            metrics = BaseService._class_metrics.setdefault(class_name, {})
            metric_data = metrics.setdefault(
                operation,
                {
                    "count": 0,
                    "total_time": 0.0,
                    "success_count": 0,
                    "failure_count": 0,
                    "min_time": float("inf"),
                    "max_time": 0.0,
                },
            )
            metric_data["count"] += 1
            metric_data["total_time"] += elapsed
            metric_data["min_time"] = min(metric_data["min_time"], elapsed)
            metric_data["max_time"] = max(metric_data["max_time"], elapsed)
            if success:
                metric_data["success_count"] += 1
            else:
                metric_data["failure_count"] += 1

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get performance metrics for this service.

        Returns:
            Dictionary with count, timing and success rate per measured operation
        """
        class_name = self.__class__.__name__
        result: Dict[str, Any] = {}
        with BaseService._metrics_lock:
            metrics = dict(BaseService._class_metrics.get(class_name, {}))

        for operation, data in metrics.items():
            count = data["count"]
            if count == 0:
                continue
            result[operation] = {
                "count": count,
                "avg_time": data["total_time"] / count,
                "min_time": data["min_time"],
                "max_time": data["max_time"],
                "total_time": data["total_time"],
                "success_rate": data["success_count"] / count,
                "success_count": data["success_count"],
                "failure_count": data["failure_count"],
            }
        return result

    def reset_metrics(self) -> None:
        class_name = self.__class__.__name__
        with BaseService._metrics_lock:
            BaseService._class_metrics.pop(class_name, None)
        self.logger.info(f"Metrics reset for {class_name}")
