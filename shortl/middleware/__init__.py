"""HTTP middleware for the URL shortener application."""

from shortl.middleware.logging import RequestLoggingMiddleware, client_ip_of

__all__ = ["RequestLoggingMiddleware", "client_ip_of"]
