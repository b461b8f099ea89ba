"""HTML sanitisation of submitted message fields."""

from __future__ import annotations

import logging
from typing import Literal

import nh3

from board.telemetry import increment_sanitize_failure

logger = logging.getLogger(__name__)

FailurePolicy = Literal["empty", "reject"]


class SanitizationError(ValueError):
    """Raised when input cannot be sanitised and the policy is ``reject``."""


class Sanitizer:
    """Strip markup from user text using a fixed rule set.

    No tags survive. Text content is kept and re-escaped, ``<script>`` and
    ``<style>`` bodies are dropped along with comments. Cleaning already
    cleaned text returns it unchanged.
    """

    def __init__(self, enabled: bool = True, on_failure: FailurePolicy = "empty") -> None:
        self.enabled = enabled
        self.on_failure = on_failure

    def clean(self, value: str) -> str:
        if not self.enabled:
            return value

        try:
            return nh3.clean(value, tags=set(), strip_comments=True)
        except Exception as exc:
            increment_sanitize_failure()
            if self.on_failure == "reject":
                raise SanitizationError("Submitted text could not be sanitised") from exc
            logger.warning("Sanitisation failed, storing empty value: %r", exc)
            return ""


__all__ = ["Sanitizer", "SanitizationError", "FailurePolicy"]
