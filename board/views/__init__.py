"""Pydantic schemas used as views in the MVC architecture."""

from .messages import MessagePage, MessageRead

__all__ = [
    "MessagePage",
    "MessageRead",
]
