from typing import Any

from core.errors import NotFoundError
from core.logging import get_logger, kv
from schemas.patient import PatientCreate

logger = get_logger(__name__)


async def create_patient(store, payload: PatientCreate) -> dict[str, Any]:
    row = payload.model_dump()
    row["email"] = str(row["email"]).lower().strip()
    row["full_name"] = row["full_name"].strip()
    patient = await store.insert_patient(row)
    logger.info("patient created %s", kv(patient_id=patient["id"]))
    return patient


async def get_patient(store, patient_id: str) -> dict[str, Any]:
    patient = await store.fetch_patient(patient_id)
    if patient is None:
        raise NotFoundError(f"patient {patient_id} not found")
    return patient


async def list_patients(store) -> list[dict[str, Any]]:
    return await store.list_patients()
