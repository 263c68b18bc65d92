from typing import Annotated

from fastapi import Depends

from database.session import SessionLocal
from database.store import RehabStore
from services.rehab_program_service import RehabProgramService


def get_store() -> RehabStore:
    return RehabStore(SessionLocal)


StoreDep = Annotated[RehabStore, Depends(get_store)]


def get_program_service(store: StoreDep) -> RehabProgramService:
    return RehabProgramService(store)


ProgramServiceDep = Annotated[RehabProgramService, Depends(get_program_service)]
