"""Prometheus metrics instrumentation.

This module provides:
- FastAPI automatic request metrics
- Domain counters for recipe attachment and sidecar reconstruction
- Metrics endpoint configuration
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from event_recipes.core.config import get_settings
from event_recipes.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from event_recipes.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "event_recipes"

RECIPES_ATTACHED = Counter(
    "recipes_attached_total",
    "Recipes attached to events",
    labelnames=("kind",),
    namespace=METRIC_NAMESPACE,
)

DUPLICATE_RECIPES_REJECTED = Counter(
    "duplicate_recipes_rejected_total",
    "Attach attempts rejected because the external recipe was already on the event",
    namespace=METRIC_NAMESPACE,
)

SIDECAR_PARSE_FAILURES = Counter(
    "sidecar_parse_failures_total",
    "Stored recipe payloads that could not be parsed during reconstruction",
    namespace=METRIC_NAMESPACE,
)


def setup_metrics(app: FastAPI, settings: Settings | None = None) -> Instrumentator:
    """Configure Prometheus metrics instrumentation.

    Sets up automatic HTTP request metrics collection including request
    count, latency histogram, and requests-in-progress gauge, and exposes
    them at ``{prefix}/metrics``.

    Args:
        app: The FastAPI application instance.
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured Instrumentator instance.
    """
    if settings is None:
        settings = get_settings()

    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )

    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)

    return instrumentator


__all__ = [
    "DUPLICATE_RECIPES_REJECTED",
    "RECIPES_ATTACHED",
    "SIDECAR_PARSE_FAILURES",
    "setup_metrics",
]
