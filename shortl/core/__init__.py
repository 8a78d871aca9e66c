"""Core module for the URL shortener application."""

from shortl.core.config import settings

__all__ = ["settings"]
