"""Jinja2 rendering of board pages."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates
from markupsafe import Markup
from starlette.responses import HTMLResponse

from board.config.settings import BoardConfig
from board.services.sanitizer import Sanitizer
from board.views import MessagePage

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class PageRenderer:
    """Render the listing and error pages for one board configuration."""

    def __init__(self, config: BoardConfig, directory: Path = TEMPLATES_DIR) -> None:
        self.config = config
        self.sanitizer = Sanitizer()
        self.templates = Jinja2Templates(directory=str(directory))
        self.templates.env.filters["stored_text"] = self._stored_text

    def _stored_text(self, value: str) -> str:
        # Stored rows are cleaned on the way out too; clean text is unchanged.
        if self.config.sanitize:
            return Markup(self.sanitizer.clean(value))
        return value

    @property
    def listing_template(self) -> str:
        return "board.html" if self.config.variant == "featured" else "board_plain.html"

    def render_listing(self, request: Request, page: MessagePage) -> HTMLResponse:
        return self.templates.TemplateResponse(
            request,
            self.listing_template,
            {
                "title": self.config.title,
                "page": page,
            },
        )

    def render_error(self, request: Request, status_code: int, detail: str) -> HTMLResponse:
        return self.templates.TemplateResponse(
            request,
            "error.html",
            {
                "title": self.config.title,
                "status_code": status_code,
                "detail": detail,
            },
            status_code=status_code,
        )


__all__ = ["PageRenderer", "TEMPLATES_DIR"]
