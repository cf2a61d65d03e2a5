from __future__ import annotations

from datetime import date
from typing import Optional

from flask import flash

from ..core.enums import FlashCategory
from .datetime_utils import now_local, parse_iso_date


def selected_day(value: Optional[str], *, warn: bool = True) -> date:
    """Day picked in a date input; empty or invalid values fall back to today.

    Pass warn=False for responses that never render flashes (downloads).
    """
    today = now_local().date()
    if not value:
        return today
    try:
        return parse_iso_date(value)
    except ValueError:
        if warn:
            flash(f"Fecha inválida: {value}. Se muestra el día de hoy.", FlashCategory.WARNING.value)
        return today
