"""Core: config, exception handlers, rate limiter, and application bootstrap."""

from object_selector.core.config import get_settings

__all__ = ["get_settings"]
