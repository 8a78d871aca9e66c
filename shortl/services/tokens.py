"""Short token generation."""

import secrets
import string

DEFAULT_ALPHABET = string.ascii_letters


def generate_token(length: int = 6, alphabet: str = DEFAULT_ALPHABET) -> str:
    """
    Generate a random short token.

    Each character is drawn independently and uniformly from ``alphabet``
    using the operating system's entropy source, so tokens cannot be
    predicted from earlier ones.

    Args:
        length: Number of characters in the token
        alphabet: Characters to draw from, mixed-case ASCII letters by default

    Returns:
        str: The token

    Raises:
        ValueError: If ``length`` is not positive or ``alphabet`` is empty
    """
    if length < 1:
        raise ValueError(f"Token length must be positive, got {length}")
    if not alphabet:
        raise ValueError("Token alphabet must not be empty")
    return "".join(secrets.choice(alphabet) for _ in range(length))
