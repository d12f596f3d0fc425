"""Observability helpers: structlog setup plus request-id/access-log middleware."""
