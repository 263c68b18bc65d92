"""
Persisting a generated program.

The store only offers isolated single-table writes, so a save is two dependent inserts:

    1. programs           one header row
    2. program_exercises  every sanitized exercise, one batch

If (2) fails the header from (1) is deleted (one compensating step) and StorageError
is raised whatever the outcome of that delete. Input checks and sanitization run before
any write, so a ValidationError never leaves rows behind.
"""
from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel

from core.errors import StorageError, ValidationError
from core.logging import get_logger, kv
from database.store import describe_error, is_duplicate_program
from services.program_sanitizer import is_valid_exercise, parse_program_date, program_end_date, sanitize_exercise

logger = get_logger(__name__)


def _as_record(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def _program_days(program: Any) -> list[Any]:
    record = _as_record(program)
    days = record.get("days") if isinstance(record, Mapping) else None
    if not isinstance(days, list) or not days:
        raise ValidationError("program.days", "must be a non-empty list")
    return days


def sanitize_program_exercises(days: list[Any]) -> list[dict[str, Any]]:
    """Flatten every day's exercises into sanitized rows, in day order."""
    rows: list[dict[str, Any]] = []
    for day_index, day in enumerate(days):
        day = _as_record(day)
        if not isinstance(day, Mapping):
            raise ValidationError(f"program.days[{day_index}]", "must be an object")
        exercises = day.get("exercises")
        if exercises is None:
            continue
        if not isinstance(exercises, list):
            raise ValidationError(f"program.days[{day_index}].exercises", "must be a list")
        for ex_index, raw in enumerate(exercises):
            row = sanitize_exercise(_as_record(raw))
            if not is_valid_exercise(row):
                # The sanitizer's fallbacks make this unreachable; treat it as a logic error.
                raise ValidationError(
                    f"program.days[{day_index}].exercises[{ex_index}]",
                    f"sanitized exercise still out of bounds: {row!r}",
                )
            rows.append(row)
    return rows


class ProgramPersister:
    def __init__(self, store):
        self.store = store

    async def save(self, patient_id: str, start_date: str | date, notes: str | None, program: Any) -> dict[str, Any]:
        if not isinstance(patient_id, str) or not patient_id.strip():
            raise ValidationError("patient_id", "must be a non-empty string")
        start = parse_program_date(start_date)
        days = _program_days(program)
        rows = sanitize_program_exercises(days)
        if not rows:
            raise ValidationError("program.days", "contains no exercises")

        header = {
            "patient_id": patient_id,
            "program_start_date": start,
            "program_end_date": program_end_date(start),
            "notes": notes.strip() if isinstance(notes, str) and notes.strip() else None,
        }

        # Phase 1: header. Nothing to compensate if this fails.
        try:
            created = await self.store.insert_program(header)
        except Exception as exc:
            logger.error("program header insert failed %s", kv(patient_id=patient_id, start=start.isoformat(), error=str(exc)))
            raise StorageError("program", describe_error(exc), conflict=is_duplicate_program(exc)) from exc

        program_id = created["id"]
        logger.info("program header created %s", kv(program_id=program_id, patient_id=patient_id))

        # Phase 2: exercises, one batch tied to the header.
        try:
            await self.store.insert_program_exercises([{**row, "program_id": program_id} for row in rows])
        except Exception as exc:
            logger.error("program exercises insert failed %s", kv(program_id=program_id, rows=len(rows), error=str(exc)))
            compensation = await self._compensate(program_id)
            raise StorageError("exercises", describe_error(exc), compensation=compensation) from exc

        logger.info("program saved %s", kv(program_id=program_id, exercises=len(rows)))
        return created

    async def _compensate(self, program_id: str) -> str:
        try:
            await self.store.delete_program(program_id)
        except Exception as exc:
            logger.error("compensation failed, orphaned program header %s", kv(program_id=program_id, error=str(exc)))
            return "failed"
        logger.warning("compensation succeeded, program header removed %s", kv(program_id=program_id))
        return "succeeded"
