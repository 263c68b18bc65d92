"""
Exercise sanitization and validation.

sanitize_exercise() turns a loosely-typed draft (generator output, a JSON payload,
anything) into a row that satisfies the program_exercises constraints, applying a
fallback per field instead of rejecting. is_valid_exercise() re-checks the result
against the same bounds. Both take and return plain dicts.
"""
from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any

from core.errors import ValidationError

PHASES = ("isometric", "concentric", "eccentric", "plyometric")

FALLBACK_NAME = "Γενική άσκηση"
FALLBACK_SETS = 2
FALLBACK_REPS = 10
FALLBACK_PHASE = "isometric"
FALLBACK_LEVEL = 1

SETS_RANGE = (1, 10)
REPS_RANGE = (1, 50)
LEVEL_RANGE = (1, 10)

PROGRAM_LENGTH_DAYS = 7

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def coerce_int(value: Any) -> int | None:
    """Best-effort integer from ints, finite floats and numeric strings; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return round_half_up(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return coerce_int(float(text))
        except ValueError:
            return None
    return None


def _bounded(value: Any, bounds: tuple[int, int], fallback: int) -> int:
    n = coerce_int(value)
    if n is None or not bounds[0] <= n <= bounds[1]:
        return fallback
    return n


def _phase(value: Any) -> str:
    if isinstance(value, str):
        p = value.strip().lower()
        if p in PHASES:
            return p
    return FALLBACK_PHASE


def _name(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return FALLBACK_NAME


def _video_link(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def sanitize_exercise(raw: Any) -> dict[str, Any]:
    """
    Map an exercise draft onto a storable row.

    Accepts draft keys (name, difficulty, pain_level) as well as row keys
    (exercise_name, difficulty_level), so stored rows sanitize to themselves.
    """
    draft: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    name = draft.get("name", draft.get("exercise_name"))
    difficulty = draft.get("difficulty", draft.get("difficulty_level"))
    pain = draft.get("pain_level", draft.get("painLevel"))

    return {
        "exercise_name": _name(name),
        "sets": _bounded(draft.get("sets"), SETS_RANGE, FALLBACK_SETS),
        "reps": _bounded(draft.get("reps"), REPS_RANGE, FALLBACK_REPS),
        "phase": _phase(draft.get("phase")),
        "difficulty_level": _bounded(difficulty, LEVEL_RANGE, FALLBACK_LEVEL),
        "pain_level": _bounded(pain, LEVEL_RANGE, FALLBACK_LEVEL),
        "video_link": _video_link(draft.get("video_link")),
    }


def _strict_int_in(value: Any, bounds: tuple[int, int]) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and bounds[0] <= value <= bounds[1]


def is_valid_exercise(row: Mapping[str, Any]) -> bool:
    name = row.get("exercise_name")
    if not isinstance(name, str) or not name.strip():
        return False
    if not _strict_int_in(row.get("sets"), SETS_RANGE):
        return False
    if not _strict_int_in(row.get("reps"), REPS_RANGE):
        return False
    if row.get("phase") not in PHASES:
        return False
    for key in ("difficulty_level", "pain_level"):
        value = row.get(key)
        if value is not None and not _strict_int_in(value, LEVEL_RANGE):
            return False
    link = row.get("video_link")
    return link is None or isinstance(link, str)


def parse_program_date(value: Any, field: str = "start_date") -> date:
    """Strict YYYY-MM-DD (a date instance is accepted as-is)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(field, f"expected YYYY-MM-DD, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(field, f"not a calendar date: {value!r}") from exc


def program_end_date(start: date) -> date:
    return start + timedelta(days=PROGRAM_LENGTH_DAYS - 1)
