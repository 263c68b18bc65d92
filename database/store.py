"""
Relational store collaborator.

Every method is one isolated single-table operation in its own transaction, the same
surface a remote table API exposes. Callers that need to coordinate several writes
(see services/program_persister.py) must do so themselves. Rows cross the boundary as
plain dicts.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, desc, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from models.base import Base
from models.patient import Patient
from models.program import Program, ProgramExercise


def _row(obj: Base) -> dict[str, Any]:
    return {c.key: getattr(obj, c.key) for c in obj.__table__.columns}


def describe_error(exc: BaseException) -> str:
    """Short cause of a store failure, safe to show callers: no SQL text or bound parameters."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return type(exc).__name__


def is_duplicate_program(exc: BaseException) -> bool:
    """True when a header insert hit the one-program-per-patient-and-start-date rule."""
    if not isinstance(exc, IntegrityError):
        return False
    cause = str(exc.orig if exc.orig is not None else exc)
    # SQLite names the columns, other backends name the constraint.
    return "uq_programs_patient_start" in cause or "unique" in cause.lower()


class RehabStore:
    def __init__(self, sessionmaker: async_sessionmaker):
        self._sessionmaker = sessionmaker

    # patients

    async def fetch_patient(self, patient_id: str) -> dict[str, Any] | None:
        async with self._sessionmaker() as db:
            patient = await db.get(Patient, patient_id)
            return _row(patient) if patient else None

    async def fetch_patient_by_email(self, email: str) -> dict[str, Any] | None:
        async with self._sessionmaker() as db:
            patient = (await db.execute(select(Patient).where(Patient.email == email).limit(1))).scalar_one_or_none()
            return _row(patient) if patient else None

    async def insert_patient(self, row: dict[str, Any]) -> dict[str, Any]:
        async with self._sessionmaker() as db:
            patient = Patient(**row)
            db.add(patient)
            await db.commit()
            return _row(patient)

    async def list_patients(self) -> list[dict[str, Any]]:
        async with self._sessionmaker() as db:
            rows = (await db.execute(select(Patient).order_by(desc(Patient.created_at)))).scalars().all()
            return [_row(p) for p in rows]

    # programs

    async def insert_program(self, row: dict[str, Any]) -> dict[str, Any]:
        async with self._sessionmaker() as db:
            program = Program(**row)
            db.add(program)
            await db.commit()
            return _row(program)

    async def delete_program(self, program_id: str) -> bool:
        async with self._sessionmaker() as db:
            result = await db.execute(delete(Program).where(Program.id == program_id))
            await db.commit()
            return bool(result.rowcount)

    async def fetch_program(self, program_id: str) -> dict[str, Any] | None:
        async with self._sessionmaker() as db:
            program = await db.get(Program, program_id)
            return _row(program) if program else None

    async def list_programs(self, patient_id: str, limit: int | None = None) -> list[dict[str, Any]]:
        stmt = select(Program).where(Program.patient_id == patient_id).order_by(desc(Program.created_at))
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._sessionmaker() as db:
            rows = (await db.execute(stmt)).scalars().all()
            return [_row(p) for p in rows]

    async def latest_program(self, patient_id: str) -> dict[str, Any] | None:
        rows = await self.list_programs(patient_id, limit=1)
        return rows[0] if rows else None

    # program exercises

    async def insert_program_exercises(self, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
        async with self._sessionmaker() as db:
            exercises = [ProgramExercise(**r) for r in rows]
            db.add_all(exercises)
            await db.commit()
            return [_row(e) for e in exercises]

    async def list_program_exercises(self, program_id: str) -> list[dict[str, Any]]:
        async with self._sessionmaker() as db:
            rows = (
                await db.execute(
                    select(ProgramExercise)
                    .where(ProgramExercise.program_id == program_id)
                    .order_by(ProgramExercise.created_at.asc())
                )
            ).scalars().all()
            return [_row(e) for e in rows]
