"""Persistence accessor owning every read and write of the messages table."""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from board.models.message import Message
from board.views import MessageRead

logger = logging.getLogger(__name__)

# Largest value SQLite binds as an INTEGER
MAX_OFFSET = 2**63 - 1


class StoreError(RuntimeError):
    """Raised when the message store cannot complete an operation."""


class MessageStore:
    """Run parameterised inserts and selects against the messages table.

    Every call checks a connection out of the engine pool through a fresh
    session and returns it when the call completes.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_messages(
        self,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[MessageRead]:
        """Return up to ``limit`` messages, newest first, skipping ``offset``.

        ``limit=None`` returns every row.
        """

        if not 0 <= offset <= MAX_OFFSET:
            raise ValueError(f"offset must be between 0 and {MAX_OFFSET}, got {offset}")
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        statement = select(Message).order_by(
            Message.created_at.desc(),
            Message.id.desc(),
        )
        if limit is not None:
            statement = statement.limit(limit)
        if offset:
            statement = statement.offset(offset)

        try:
            async with self._session_factory() as session:
                result = await session.execute(statement)
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            raise StoreError("Failed to read messages") from exc

        return [MessageRead.model_validate(row) for row in rows]

    async def insert_message(self, name: str, content: str) -> MessageRead:
        """Append one message; the store assigns ``id`` and ``created_at``."""

        try:
            async with self._session_factory() as session:
                db_message = Message(name=name, content=content)
                session.add(db_message)
                await session.commit()
                await session.refresh(db_message)
        except SQLAlchemyError as exc:
            raise StoreError("Failed to store message") from exc

        logger.debug("Stored message id=%s", db_message.id)
        return MessageRead.model_validate(db_message)


__all__ = ["MAX_OFFSET", "MessageStore", "StoreError"]
