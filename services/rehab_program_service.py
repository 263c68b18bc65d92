from __future__ import annotations

from datetime import date
from typing import Any

from core.config import settings
from core.errors import NotFoundError
from schemas.program import GeneratedProgram
from services.program_generator import ProgramGenerator
from services.program_persister import ProgramPersister


class RehabProgramService:
    """Entry point used by the API: generate, save, and the dashboard reads."""

    def __init__(self, store, generator: ProgramGenerator | None = None, persister: ProgramPersister | None = None):
        self.store = store
        self._generator = generator
        self.persister = persister or ProgramPersister(store)

    @property
    def generator(self) -> ProgramGenerator:
        # Built on first generate(); saves and reads never load the catalog.
        if self._generator is None:
            self._generator = ProgramGenerator.from_settings(self.store, settings)
        return self._generator

    async def generate(self, patient_id: str, start_date: str | date, seed: int | None = None) -> GeneratedProgram:
        return await self.generator.generate(patient_id, start_date, seed=seed)

    async def save(self, patient_id: str, start_date: str | date, notes: str | None, program: Any) -> dict[str, Any]:
        return await self.persister.save(patient_id, start_date, notes, program)

    async def latest_program(self, patient_id: str) -> dict[str, Any] | None:
        return await self.store.latest_program(patient_id)

    async def list_programs(self, patient_id: str) -> list[dict[str, Any]]:
        return await self.store.list_programs(patient_id)

    async def get_program(self, program_id: str) -> dict[str, Any]:
        program = await self.store.fetch_program(program_id)
        if program is None:
            raise NotFoundError(f"program {program_id} not found")
        exercises = await self.store.list_program_exercises(program_id)
        return {**program, "exercises": exercises}
