# (c) Copyright Datacraft, 2026
from .base import Base
from .engine import get_db, get_engine, get_session_factory

__all__ = ["Base", "get_db", "get_engine", "get_session_factory"]
