"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class LinkError(ServiceError):
    """Base exception for link-related errors."""
    pass


class InvalidURLError(LinkError):
    """The URL is malformed or uses a scheme other than http/https."""
    pass


class BadRequestError(LinkError):
    """The request names neither a long URL nor a short token."""
    pass


class LinkNotFoundError(LinkError):
    """No link matches the given long URL or short token."""
    pass


class TokenCollisionError(LinkError):
    """Every generated token was already taken by another link; the client may retry."""
    pass


class StoreUnavailableError(ServiceError):
    """The backing store failed, timed out or could not be reached."""
    pass
