"""Core application infrastructure: configuration, errors, lifecycle, middleware."""
