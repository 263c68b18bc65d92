"""
Weekly rehabilitation program generation.

Placeholder content generator: the exercise choice is a lookup in the exercise catalog,
scaled by the patient's pain and difficulty levels. What callers rely on is the shape:
7 consecutive days, a bounded number of exercises per day, every field in range, and the
physiotherapist-session day flagged. With a seed the output is a pure function of
(patient, start date, seed).
"""
from __future__ import annotations

import random
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any

from core.config import settings
from core.errors import NotFoundError, UpstreamFetchError, ValidationError
from core.logging import get_logger, kv
from database.store import describe_error
from schemas.program import ExerciseDraft, GeneratedProgram, RehabDay
from services.exercise_catalog import ExerciseCatalog, get_catalog
from services.program_sanitizer import PHASES, PROGRAM_LENGTH_DAYS, coerce_int, parse_program_date, round_half_up

logger = get_logger(__name__)

DEFAULT_PAIN_LEVEL = 5
DEFAULT_DIFFICULTY_LEVEL = 4
DEFAULT_AREA = "general"

WEEKLY_GOALS = [
    "Μείωση του πόνου κατά τουλάχιστον 1-2 μονάδες στην κλίμακα 1-10",
    "Βελτίωση της λειτουργικότητας στις καθημερινές δραστηριότητες",
    "Αύξηση του εύρους κίνησης της προβληματικής περιοχής",
]


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _level(value: Any, default: int) -> int:
    n = coerce_int(value)
    return default if n is None else _clamp(n, 0, 10)


def session_date(value: Any) -> date | None:
    """Calendar date of a next-session value; time-of-day and offsets are ignored."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _summary(full_name: str, area: str, pain: int) -> str:
    focus = (
        f"Εστιάζει στην περιοχή: {area} με επίπεδο πόνου {pain}/10."
        if area != DEFAULT_AREA
        else "Εστιάζει σε γενική ενδυνάμωση και κινητικότητα."
    )
    return (
        f"Εβδομαδιαίο πρόγραμμα αποκατάστασης για τον/την {full_name}. {focus} "
        "Σχεδιασμένο με βάση την τρέχουσα κατάσταση και τους προσωπικούς στόχους του ασθενή."
    )


def build_program(
    patient: Mapping[str, Any],
    start: date,
    catalog: ExerciseCatalog,
    rng: random.Random,
    exercises_per_day: tuple[int, int] = (2, 3),
    rest_day_factor: float = 0.8,
    pain_factor_floor: float = 0.4,
) -> GeneratedProgram:
    pain = _level(patient.get("pain_level"), DEFAULT_PAIN_LEVEL)
    difficulty = _level(patient.get("difficulty_level"), DEFAULT_DIFFICULTY_LEVEL)
    area = patient.get("affected_area")
    area = area.strip() if isinstance(area, str) and area.strip() else DEFAULT_AREA
    next_session = session_date(patient.get("next_session_date"))

    pool = catalog.exercises_for(area)
    # Higher pain means lower intensity.
    pain_factor = max(1 - pain / 10, pain_factor_floor)

    days: list[RehabDay] = []
    for i in range(PROGRAM_LENGTH_DAYS):
        current = start + timedelta(days=i)
        is_session_day = next_session is not None and current == next_session
        day_factor = 1.0 if is_session_day else rest_day_factor
        scale = day_factor * pain_factor

        count = rng.randint(*exercises_per_day)
        exercises = [
            ExerciseDraft(
                name=pool[(i + j) % len(pool)],
                sets=_clamp(round_half_up(3 * scale), 1, 4),
                reps=_clamp(round_half_up(10 * scale), 5, 15),
                phase=rng.choice(PHASES),
                difficulty=_clamp(round_half_up(difficulty * scale), 2, 10),
                # Target pain level while exercising.
                pain_level=_clamp(pain - 1, 1, 8),
                source=rng.choice(catalog.sources),
            )
            for j in range(count)
        ]
        days.append(
            RehabDay(
                day_number=i + 1,
                date=current,
                exercises=exercises,
                has_physiotherapist_session=is_session_day,
            )
        )

    return GeneratedProgram(
        summary=_summary(str(patient.get("full_name") or ""), area, pain),
        weekly_goals=list(WEEKLY_GOALS),
        days=days,
    )


class ProgramGenerator:
    def __init__(
        self,
        store,
        catalog: ExerciseCatalog | None = None,
        exercises_per_day: tuple[int, int] = (2, 3),
        rest_day_factor: float = 0.8,
        pain_factor_floor: float = 0.4,
        seed: int | None = None,
    ):
        lo, hi = exercises_per_day
        if lo < 1 or hi < lo:
            raise ValueError(f"invalid exercises_per_day range: {exercises_per_day!r}")
        self.store = store
        self.catalog = catalog or ExerciseCatalog()
        self.exercises_per_day = (lo, hi)
        self.rest_day_factor = rest_day_factor
        self.pain_factor_floor = pain_factor_floor
        self.seed = seed

    @classmethod
    def from_settings(cls, store, cfg=settings) -> "ProgramGenerator":
        return cls(
            store,
            catalog=get_catalog(cfg.exercise_catalog_path),
            exercises_per_day=(cfg.exercises_per_day_min, cfg.exercises_per_day_max),
            rest_day_factor=cfg.rest_day_factor,
            pain_factor_floor=cfg.pain_factor_floor,
            seed=cfg.generator_seed,
        )

    async def generate(self, patient_id: str, start_date: str | date, seed: int | None = None) -> GeneratedProgram:
        if not isinstance(patient_id, str) or not patient_id.strip():
            raise ValidationError("patient_id", "must be a non-empty string")
        start = parse_program_date(start_date)

        try:
            patient = await self.store.fetch_patient(patient_id)
        except Exception as exc:
            logger.error("patient fetch failed %s", kv(patient_id=patient_id, error=str(exc)))
            raise UpstreamFetchError(f"could not fetch patient {patient_id}: {describe_error(exc)}") from exc
        if patient is None:
            raise NotFoundError(f"patient {patient_id} not found")

        rng = random.Random(seed if seed is not None else self.seed)
        program = build_program(
            patient,
            start,
            self.catalog,
            rng,
            exercises_per_day=self.exercises_per_day,
            rest_day_factor=self.rest_day_factor,
            pain_factor_floor=self.pain_factor_floor,
        )
        logger.info(
            "program generated %s",
            kv(
                patient_id=patient_id,
                start=start.isoformat(),
                exercises=sum(len(d.exercises) for d in program.days),
            ),
        )
        return program
