"""Turns raw plan-form fields into a validated ScheduleRequest."""

import math
from collections.abc import Mapping

from loguru import logger

from timely.schema import ScheduleRequest
from timely.settings import Settings, settings as default_settings
from timely.utils.time import parse_start_time

NUMERIC_FIELDS = ("work_hours", "lunch_break", "short_break", "work_session")
FORM_FIELDS = ("name", *NUMERIC_FIELDS, "start_hour")


def _clean(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def parse_number(raw: object, default: float, field: str = "value") -> float:
    """
    Coerces a raw form value into a positive float.

    Missing, empty, unparseable, non-finite or non-positive input falls back to
    ``default`` instead of raising.
    """
    text = _clean(raw)
    if not text:
        return default
    try:
        value = float(text)
    except ValueError:
        logger.debug(f"Could not read {field}={text!r}; using default {default}")
        return default
    if not math.isfinite(value) or value <= 0:
        logger.debug(f"Ignoring {field}={text!r}; using default {default}")
        return default
    return value


def parse_form(
    fields: Mapping[str, object], defaults: Settings | None = None
) -> ScheduleRequest:
    """
    Builds a ScheduleRequest from submitted form fields.

    Raises:
        InvalidStartTimeError: If a non-empty start hour is malformed.
    """
    defaults = defaults or default_settings

    start_hour = _clean(fields.get("start_hour")) or defaults.start_hour
    # Normalize '9:30am' and friends to the canonical HH:MM form.
    start_hour = parse_start_time(start_hour).strftime("%H:%M")

    numbers = {
        name: parse_number(fields.get(name), getattr(defaults, name), field=name)
        for name in NUMERIC_FIELDS
    }
    return ScheduleRequest(
        name=_clean(fields.get("name")),
        start_hour=start_hour,
        **numbers,
    )
