# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Input checks for vacation create / update.

Multipart forms arrive as plain strings, so presence, number and date
parsing all happen here, before any database call.  Every failure raises
``ValidationError`` (400).
"""

from datetime import date, datetime, timezone
from typing import Optional

from core.config import settings
from core.exceptions import ValidationError
from vacations.schemas import VacationInput


def _parse_date(name: str, raw: str) -> date:
    """Accept ``YYYY-MM-DD`` or a full ISO datetime (truncated to its date)."""
    raw = raw.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(f"{name} must be an ISO-8601 date")


def _parse_price(raw: str) -> float:
    try:
        price = float(raw)
    except ValueError:
        raise ValidationError("price must be a number")
    if not (0 <= price <= settings.max_price):
        raise ValidationError(f"price must be between 0 and {settings.max_price:g}")
    return price


def validate_vacation_form(
    destination: Optional[str],
    description: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    price: Optional[str],
    require_future: bool,
    today: Optional[date] = None,
) -> VacationInput:
    """
    Validate the textual part of a vacation form.

    *require_future* is set on creation only: both dates must then be
    strictly after *today* (UTC).  Updates may touch past or in-progress
    vacations, so they only check ``end_date >= start_date``.
    """
    fields = {
        "destination": destination,
        "description": description,
        "start_date": start_date,
        "end_date": end_date,
        "price": price,
    }
    for name, value in fields.items():
        if value is None or not value.strip():
            raise ValidationError(f"{name} is required")

    parsed_price = _parse_price(price)
    start = _parse_date("start_date", start_date)
    end = _parse_date("end_date", end_date)

    if end < start:
        raise ValidationError("end_date cannot be before start_date")

    if require_future:
        today = today or datetime.now(timezone.utc).date()
        if start <= today or end <= today:
            raise ValidationError("start_date and end_date must be in the future")

    return VacationInput(
        destination=destination.strip(),
        description=description.strip(),
        start_date=start,
        end_date=end,
        price=parsed_price,
    )
