import uuid
from datetime import date, datetime

from sqlalchemy import CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, utcnow


class Program(Base):
    """Week-level header tying a patient to a 7-day date range."""

    __tablename__ = "programs"
    # One program per patient per start date; a double submit fails on the header insert.
    __table_args__ = (UniqueConstraint("patient_id", "program_start_date", name="uq_programs_patient_start"),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    patient_id: Mapped[str] = mapped_column(String, ForeignKey("patients.id"), index=True, nullable=False)
    program_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    program_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)


class ProgramExercise(Base):
    __tablename__ = "program_exercises"
    __table_args__ = (
        CheckConstraint("sets BETWEEN 1 AND 10", name="ck_program_exercises_sets"),
        CheckConstraint("reps BETWEEN 1 AND 50", name="ck_program_exercises_reps"),
        CheckConstraint(
            "phase IN ('isometric', 'concentric', 'eccentric', 'plyometric')",
            name="ck_program_exercises_phase",
        ),
        CheckConstraint(
            "difficulty_level IS NULL OR difficulty_level BETWEEN 1 AND 10",
            name="ck_program_exercises_difficulty",
        ),
        CheckConstraint("pain_level IS NULL OR pain_level BETWEEN 1 AND 10", name="ck_program_exercises_pain"),
        CheckConstraint("length(trim(exercise_name)) > 0", name="ck_program_exercises_name"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    program_id: Mapped[str] = mapped_column(
        String, ForeignKey("programs.id", ondelete="CASCADE"), index=True, nullable=False
    )
    exercise_name: Mapped[str] = mapped_column(String, nullable=False)
    sets: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    phase: Mapped[str] = mapped_column(String, nullable=False)
    difficulty_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pain_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    video_link: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
