"""API route modules."""

from . import playwright

__all__ = ["playwright"]
