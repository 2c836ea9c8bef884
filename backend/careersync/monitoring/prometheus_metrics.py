"""
Prometheus metrics for the booking core.

Service-level timings come from the ``@measure_operation`` decorator on
``BaseService``; allocation outcomes are counted by ``BookingService``.
"""

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Custom registry so repeated imports in tests never collide with the global one
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "careersync_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

service_operations_total = Counter(
    "careersync_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "careersync_errors_total",
    "Total number of errors by type",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

booking_allocations_total = Counter(
    "careersync_booking_allocations_total",
    "Booking allocation attempts by outcome",
    ["outcome"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Thin facade over the module-level collectors."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record one service call.

        Args:
            service: Service class name (e.g. 'BookingService')
            operation: Operation name (e.g. 'allocate')
            duration: Duration in seconds
            status: 'success' or 'error'
            error_type: Exception class name when status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()

        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_allocation(outcome: str) -> None:
        """Count an allocation attempt: 'allocated', 'conflict', 'busy' or 'rejected'."""
        booking_allocations_total.labels(outcome=outcome).inc()

    @staticmethod
    def get_metrics() -> bytes:
        return generate_latest(REGISTRY)

    @staticmethod
    def get_content_type() -> str:
        return CONTENT_TYPE_LATEST


prometheus_metrics = PrometheusMetrics()
