"""Redirect target validation."""

import string
from urllib.parse import urlsplit

from pydantic import HttpUrl, TypeAdapter, ValidationError

ALLOWED_SCHEMES = frozenset({"http", "https"})

# Host names are letters, digits, hyphens, dots and underscores; colons
# appear in bracketed IPv6 literals
HOST_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-._:")

_http_url = TypeAdapter(HttpUrl)


def _is_host_character(char: str) -> bool:
    # Non-ASCII letters are allowed for internationalized domain names
    return char in HOST_CHARACTERS or (not char.isascii() and char.isalnum())


def is_valid_url(candidate) -> bool:
    """
    Check whether a string is an acceptable redirect target.

    Only absolute ``http``/``https`` URLs with a well-formed host are
    accepted. Other schemes (``javascript:``, ``slack:``, ``jdbc:`` ...)
    could smuggle scripts or deep links behind a trusted short link, and
    bare host names are not absolute URLs. The candidate is only checked,
    never normalized; callers store it as given.

    Args:
        candidate: The caller-supplied value

    Returns:
        bool: True if the URL may be shortened, False otherwise
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    try:
        parts = urlsplit(candidate)
        # Accessing the port validates it
        parts.port
    except ValueError:
        return False

    if parts.scheme not in ALLOWED_SCHEMES or not parts.hostname:
        return False
    if not all(_is_host_character(char) for char in parts.hostname):
        return False

    try:
        _http_url.validate_python(candidate)
    except ValidationError:
        return False
    return True
