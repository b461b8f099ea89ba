"""FastAPI routers acting as controllers in the MVC architecture."""

from . import messages

__all__ = ["messages"]
