"""Tests for short token generation."""

import string

import pytest

from shortl.services.tokens import generate_token


def test_default_token_shape():
    token = generate_token()

    assert len(token) == 6
    assert all(char in string.ascii_letters for char in token)


@pytest.mark.parametrize("length", [1, 6, 12])
def test_token_length(length):
    assert len(generate_token(length)) == length


def test_custom_alphabet():
    assert set(generate_token(50, alphabet="ab")) <= {"a", "b"}


def test_tokens_vary():
    tokens = {generate_token() for _ in range(200)}
    assert len(tokens) > 190


def test_uses_both_cases():
    chars = "".join(generate_token(12) for _ in range(50))
    assert any(c.islower() for c in chars)
    assert any(c.isupper() for c in chars)


@pytest.mark.parametrize("length", [0, -1])
def test_rejects_non_positive_length(length):
    with pytest.raises(ValueError):
        generate_token(length)


def test_rejects_empty_alphabet():
    with pytest.raises(ValueError):
        generate_token(6, alphabet="")
