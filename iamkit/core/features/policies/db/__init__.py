# (c) Copyright Datacraft, 2026
"""Policy database models and operations."""

from .orm import Policy

__all__ = ["Policy"]
