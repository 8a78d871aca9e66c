"""Service layer for the URL shortener application.

This package contains the business logic of the application: URL
validation, token generation and the link lifecycle built on them.
"""

from shortl.services.links import LinkService
from shortl.services.tokens import generate_token
from shortl.services.validation import is_valid_url

__all__ = ["LinkService", "generate_token", "is_valid_url"]
