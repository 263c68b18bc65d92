# tests/test_program_generator.py
import json
import random
from datetime import date, datetime

import pytest

from core.config import Settings, settings
from core.errors import NotFoundError, UpstreamFetchError, ValidationError
from services.exercise_catalog import DEFAULT_EXERCISES, DEFAULT_REGIONS, ExerciseCatalog, get_catalog, load_catalog
from services.program_generator import ProgramGenerator, build_program, session_date
from services.program_sanitizer import PHASES, is_valid_exercise, sanitize_exercise
from services.rehab_program_service import RehabProgramService

from conftest import FakeStore


def _build(patient, start=date(2025, 6, 2), seed=1, **kwargs):
    return build_program(patient, start, ExerciseCatalog(), random.Random(seed), **kwargs)


@pytest.mark.asyncio
async def test_generate_returns_seven_consecutive_days(fake_store, patient):
    program = await ProgramGenerator(fake_store, seed=7).generate(patient["id"], "2025-06-02")
    assert [d.day_number for d in program.days] == [1, 2, 3, 4, 5, 6, 7]
    assert [d.date for d in program.days] == [date(2025, 6, d) for d in range(2, 9)]
    assert len(program.weekly_goals) == 3
    assert patient["full_name"] in program.summary
    assert fake_store.calls == [("fetch_patient", patient["id"])]


@pytest.mark.asyncio
async def test_session_day_is_flagged_by_calendar_date(fake_store, patient):
    program = await ProgramGenerator(fake_store, seed=7).generate(patient["id"], "2025-06-02")
    flagged = [d.day_number for d in program.days if d.has_physiotherapist_session]
    assert flagged == [3]
    assert program.days[2].date == date(2025, 6, 4)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2025-06-04T00:00:00Z", date(2025, 6, 4)),
        ("2025-06-04T23:59:59+03:00", date(2025, 6, 4)),
        ("2025-06-04", date(2025, 6, 4)),
        (datetime(2025, 6, 4, 18, 30), date(2025, 6, 4)),
        (date(2025, 6, 4), date(2025, 6, 4)),
        (None, None),
        ("", None),
        ("soon", None),
    ],
)
def test_session_date_ignores_time_of_day(value, expected):
    assert session_date(value) == expected


def test_no_session_day_without_next_session(patient):
    program = _build({**patient, "next_session_date": None})
    assert not any(d.has_physiotherapist_session for d in program.days)


def test_session_outside_program_week_flags_nothing(patient):
    program = _build({**patient, "next_session_date": "2025-06-09"})
    assert not any(d.has_physiotherapist_session for d in program.days)


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"pain_level": None, "difficulty_level": None, "affected_area": None, "next_session_date": None},
        {"pain_level": 0, "difficulty_level": 0},
        {"pain_level": 10, "difficulty_level": 10},
        {"pain_level": "lots", "difficulty_level": -4, "affected_area": "elbow"},
        {"pain_level": 99, "difficulty_level": 3.7, "affected_area": "  KNEE "},
    ],
)
def test_shape_holds_for_any_patient_values(patient, overrides):
    for seed in range(25):
        program = _build({**patient, **overrides}, seed=seed)
        assert len(program.days) == 7
        for day in program.days:
            assert 2 <= len(day.exercises) <= 3
            for ex in day.exercises:
                assert 1 <= ex.sets <= 4
                assert 5 <= ex.reps <= 15
                assert 2 <= ex.difficulty <= 10
                assert 1 <= ex.pain_level <= 8
                assert ex.phase in PHASES
                assert is_valid_exercise(sanitize_exercise(ex.model_dump()))


def test_all_default_patient_uses_general_pool():
    program = _build({"id": "p", "full_name": "Νίκος"})
    names = {ex.name for d in program.days for ex in d.exercises}
    assert names <= set(DEFAULT_EXERCISES)
    assert "γενική ενδυνάμωση" in program.summary


def test_area_lookup_is_case_insensitive(patient):
    program = _build({**patient, "affected_area": "Shoulder"})
    names = {ex.name for d in program.days for ex in d.exercises}
    assert names <= set(DEFAULT_REGIONS["shoulder"])


def test_exercises_cycle_with_day_offset(patient):
    program = _build(patient)
    pool = DEFAULT_REGIONS["knee"]
    for i, day in enumerate(program.days):
        assert [ex.name for ex in day.exercises] == [pool[(i + j) % len(pool)] for j in range(len(day.exercises))]


def test_session_day_is_more_intense(patient):
    program = _build({**patient, "pain_level": 0, "difficulty_level": 10})
    session = program.days[2].exercises[0]
    rest = program.days[0].exercises[0]
    assert session.sets == 3 and session.reps == 10 and session.difficulty == 10
    assert rest.sets == 2 and rest.reps == 8 and rest.difficulty == 8


def test_high_pain_floors_intensity(patient):
    program = _build({**patient, "pain_level": 10, "difficulty_level": 10, "next_session_date": None})
    ex = program.days[0].exercises[0]
    # 0.8 rest day * 0.4 pain floor
    assert ex.sets == 1
    assert ex.reps == 5
    assert ex.difficulty == 3
    assert ex.pain_level == 8


def test_same_seed_same_program(patient):
    assert _build(patient, seed=42) == _build(patient, seed=42)


def test_fixed_exercise_count(patient):
    program = _build(patient, exercises_per_day=(3, 3))
    assert all(len(d.exercises) == 3 for d in program.days)


def test_invalid_count_range_is_rejected(fake_store):
    with pytest.raises(ValueError):
        ProgramGenerator(fake_store, exercises_per_day=(3, 2))


def test_catalog_is_swappable(tmp_path, patient):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"regions": {"Knee": ["Squat", "Lunge"]}, "sources": ["Clinic"]}), encoding="utf-8")
    catalog = load_catalog(path)
    program = build_program(patient, date(2025, 6, 2), catalog, random.Random(0))
    assert {ex.name for d in program.days for ex in d.exercises} <= {"Squat", "Lunge"}
    assert {ex.source for d in program.days for ex in d.exercises} == {"Clinic"}
    assert catalog.default == DEFAULT_EXERCISES


def test_catalog_rejects_empty_region(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"regions": {"knee": []}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(path)


def test_catalog_file_is_read_once_per_process(tmp_path, fake_store):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"regions": {"knee": ["Squat"]}}), encoding="utf-8")
    cfg = Settings(exercise_catalog_path=str(path))
    get_catalog.cache_clear()
    try:
        first = ProgramGenerator.from_settings(fake_store, cfg)
        path.unlink()
        second = ProgramGenerator.from_settings(fake_store, cfg)
    finally:
        get_catalog.cache_clear()
    assert second.catalog is first.catalog
    assert second.catalog.exercises_for("knee") == ["Squat"]


@pytest.mark.asyncio
async def test_broken_catalog_only_affects_generation(tmp_path, fake_store, monkeypatch):
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")
    monkeypatch.setattr(settings, "exercise_catalog_path", str(path))
    get_catalog.cache_clear()
    try:
        service = RehabProgramService(fake_store)
        saved = await service.save("patient-1", "2025-06-02", None, {"days": [{"exercises": [{"name": "Row"}]}]})
        assert saved["patient_id"] == "patient-1"
        with pytest.raises(ValueError):
            await service.generate("patient-1", "2025-06-02")
    finally:
        get_catalog.cache_clear()


@pytest.mark.asyncio
async def test_unknown_patient_raises_not_found(fake_store):
    with pytest.raises(NotFoundError):
        await ProgramGenerator(fake_store).generate("missing", "2025-06-02")


@pytest.mark.asyncio
async def test_fetch_failure_raises_upstream_error(patient):
    store = FakeStore(patients=[patient])
    store.fail_fetch_patient = ConnectionError("connection reset")
    with pytest.raises(UpstreamFetchError) as exc:
        await ProgramGenerator(store).generate(patient["id"], "2025-06-02")
    assert not isinstance(exc.value, NotFoundError)
    assert isinstance(exc.value.__cause__, ConnectionError)


@pytest.mark.asyncio
async def test_bad_start_date_rejected_before_fetch(fake_store, patient):
    with pytest.raises(ValidationError):
        await ProgramGenerator(fake_store).generate(patient["id"], "02/06/2025")
    assert fake_store.calls == []
