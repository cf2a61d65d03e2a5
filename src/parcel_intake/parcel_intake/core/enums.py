from __future__ import annotations

from enum import Enum


class FlashCategory(str, Enum):
    """Flash message categories understood by the templates."""

    SUCCESS = "success"
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"
