"""SQLAlchemy models for the MVC architecture."""

from .base import Base
from .message import Message  # noqa: F401

__all__ = ["Base", "Message"]
