# tests/conftest.py
import uuid
from datetime import datetime

import pytest
import pytest_asyncio

from database.session import init_db, make_engine, make_sessionmaker
from database.store import RehabStore


class FakeStore:
    """
    In-memory stand-in for RehabStore that records every call.
    Set fail_* attributes to an exception instance to make that operation raise.
    """

    def __init__(self, patients=None):
        self.patients = {p["id"]: p for p in (patients or [])}
        self.programs = {}
        self.exercises = []
        self.calls = []  # list of (operation, argument)
        self.fail_fetch_patient = None
        self.fail_insert_program = None
        self.fail_insert_exercises = None
        self.fail_delete_program = None

    async def fetch_patient(self, patient_id):
        self.calls.append(("fetch_patient", patient_id))
        if self.fail_fetch_patient:
            raise self.fail_fetch_patient
        return self.patients.get(patient_id)

    async def insert_program(self, row):
        self.calls.append(("insert_program", row))
        if self.fail_insert_program:
            raise self.fail_insert_program
        created = {**row, "id": str(uuid.uuid4()), "created_at": datetime(2025, 6, 1, 9, 0)}
        self.programs[created["id"]] = created
        return created

    async def insert_program_exercises(self, rows):
        self.calls.append(("insert_program_exercises", rows))
        if self.fail_insert_exercises:
            raise self.fail_insert_exercises
        self.exercises.extend(rows)
        return rows

    async def delete_program(self, program_id):
        self.calls.append(("delete_program", program_id))
        if self.fail_delete_program:
            raise self.fail_delete_program
        return self.programs.pop(program_id, None) is not None

    def operations(self):
        return [op for op, _ in self.calls]


@pytest.fixture
def patient():
    return {
        "id": "patient-1",
        "full_name": "Μαρία Παπαδοπούλου",
        "email": "maria@rehabweek.gr",
        "phone": None,
        "next_session_date": "2025-06-04T00:00:00Z",
        "affected_area": "knee",
        "pain_level": 6,
        "difficulty_level": 5,
    }


@pytest.fixture
def fake_store(patient):
    return FakeStore(patients=[patient])


@pytest_asyncio.fixture
async def sqlite_store(tmp_path):
    bind = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'rehabweek-test.db'}")
    await init_db(bind, seed=False)
    yield RehabStore(make_sessionmaker(bind))
    await bind.dispose()
