"""Common FastAPI dependencies reused across controllers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from board.config.settings import BoardConfig
from board.services import MessageStore, PageRenderer, Sanitizer


def get_store(request: Request) -> MessageStore:
    """Return the store handle created by the application lifespan."""

    return request.app.state.store


def get_board_config(request: Request) -> BoardConfig:
    return request.app.state.settings.board


def get_sanitizer(request: Request) -> Sanitizer:
    return request.app.state.sanitizer


def get_renderer(request: Request) -> PageRenderer:
    return request.app.state.renderer


StoreDep = Annotated[MessageStore, Depends(get_store)]
BoardConfigDep = Annotated[BoardConfig, Depends(get_board_config)]
SanitizerDep = Annotated[Sanitizer, Depends(get_sanitizer)]
RendererDep = Annotated[PageRenderer, Depends(get_renderer)]


__all__ = [
    "get_store",
    "get_board_config",
    "get_sanitizer",
    "get_renderer",
    "StoreDep",
    "BoardConfigDep",
    "SanitizerDep",
    "RendererDep",
]
