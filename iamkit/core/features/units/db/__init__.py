# (c) Copyright Datacraft, 2026
"""Units database models and operations."""

from .orm import Unit

__all__ = ["Unit"]
