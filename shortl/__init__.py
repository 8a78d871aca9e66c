"""shortl: a small URL shortening service with a bundled web frontend."""

__version__ = "0.1.0"
