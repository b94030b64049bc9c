# (c) Copyright Datacraft, 2026
"""Groups database models and operations."""

from .orm import Group, group_policies

__all__ = ["Group", "group_policies"]
