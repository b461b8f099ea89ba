"""SQLAlchemy model for board messages."""

from sqlalchemy import Column, DateTime, Integer, Text, func

from board.models.base import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    # CURRENT_TIMESTAMP: UTC, second resolution
    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)


__all__ = ["Message"]
