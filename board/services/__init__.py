"""Service layer: persistence, sanitisation and page rendering."""

from .message_store import MessageStore, StoreError
from .page_renderer import PageRenderer
from .sanitizer import SanitizationError, Sanitizer

__all__ = [
    "MessageStore",
    "StoreError",
    "PageRenderer",
    "Sanitizer",
    "SanitizationError",
]
