"""Custom middleware components."""

from event_recipes.core.middleware.logging import LoggingMiddleware
from event_recipes.core.middleware.request_id import RequestIDMiddleware
from event_recipes.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
