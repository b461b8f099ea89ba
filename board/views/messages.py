"""Pydantic schemas for board messages and listing pages."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class MessageRead(BaseModel):
    id: int
    name: str
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @property
    def created_label(self) -> str:
        return self.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")


class MessagePage(BaseModel):
    """One rendered page of the board.

    ``page_size`` is ``None`` when the board lists every row, in which case
    no pagination controls exist.
    """

    messages: List[MessageRead]
    offset: int = 0
    page_size: Optional[int] = None

    @property
    def has_previous(self) -> bool:
        return self.page_size is not None and self.offset > 0

    @property
    def next_offset(self) -> Optional[int]:
        if self.page_size is None or len(self.messages) < self.page_size:
            return None
        return self.offset + self.page_size
