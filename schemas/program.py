from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

Phase = Literal["isometric", "concentric", "eccentric", "plyometric"]


class ExerciseDraft(BaseModel):
    name: str
    sets: int
    reps: int
    phase: Phase
    difficulty: int
    pain_level: int
    source: str
    video_link: str | None = None


class RehabDay(BaseModel):
    day_number: int = Field(..., ge=1, le=7)
    date: date
    exercises: list[ExerciseDraft]
    has_physiotherapist_session: bool = False


class GeneratedProgram(BaseModel):
    summary: str
    weekly_goals: list[str]
    days: list[RehabDay]


class GenerateRequest(BaseModel):
    patient_id: str
    start_date: str
    seed: int | None = None


class ProgramSaveRequest(BaseModel):
    patient_id: str
    start_date: str
    notes: str | None = None
    # Exercise drafts are sanitized by the persister, not validated here.
    program: dict[str, Any]


class ProgramResponse(BaseModel):
    id: str
    patient_id: str
    program_start_date: date
    program_end_date: date
    notes: str | None = None
    created_at: datetime


class ProgramsResponse(BaseModel):
    programs: list[ProgramResponse]


class ProgramExerciseResponse(BaseModel):
    id: str
    program_id: str
    exercise_name: str
    sets: int
    reps: int
    phase: Phase
    difficulty_level: int | None = None
    pain_level: int | None = None
    video_link: str | None = None
    created_at: datetime


class ProgramDetailResponse(ProgramResponse):
    exercises: list[ProgramExerciseResponse]
