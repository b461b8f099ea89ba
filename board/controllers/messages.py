"""Listing and submission endpoints of the board."""

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Query, Request, status
from fastapi import HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from board.controllers.dependencies import (
    BoardConfigDep,
    RendererDep,
    SanitizerDep,
    StoreDep,
)
from board.services.message_store import MAX_OFFSET
from board.telemetry import increment_messages_created
from board.views import MessagePage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


OffsetQuery = Annotated[int, Query(ge=0, le=MAX_OFFSET)]


@router.get("/", response_class=HTMLResponse, name="list_messages")
async def list_messages(
    request: Request,
    store: StoreDep,
    config: BoardConfigDep,
    renderer: RendererDep,
    offset: OffsetQuery = 0,
) -> HTMLResponse:
    """Render the form and one page of messages, newest first."""

    if config.paginate:
        messages = await store.list_messages(limit=config.page_size, offset=offset)
        page = MessagePage(messages=messages, offset=offset, page_size=config.page_size)
    else:
        messages = await store.list_messages()
        page = MessagePage(messages=messages)

    return renderer.render_listing(request, page)


@router.post("/add", name="add_message")
async def add_message(
    store: StoreDep,
    config: BoardConfigDep,
    sanitizer: SanitizerDep,
    name: Annotated[str, Form()] = "",
    message: Annotated[str, Form()] = "",
) -> RedirectResponse:
    """Store a submission and send the client back to the listing."""

    clean_name = sanitizer.clean(name)
    clean_content = sanitizer.clean(message)

    if not config.allow_empty and (not clean_name or not clean_content):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both a name and a message are required.",
        )

    stored = await store.insert_message(clean_name, clean_content)
    increment_messages_created()
    logger.info("Message %s added", stored.id)

    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
