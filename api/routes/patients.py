from fastapi import APIRouter, status

from api.deps import ProgramServiceDep, StoreDep
from schemas.patient import PatientCreate, PatientResponse, PatientsResponse
from schemas.program import ProgramResponse, ProgramsResponse
from services.patient_service import create_patient, get_patient, list_patients

router = APIRouter()


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create(payload: PatientCreate, store: StoreDep):
    return await create_patient(store, payload)


@router.get("", response_model=PatientsResponse)
async def list_all(store: StoreDep):
    return PatientsResponse(patients=await list_patients(store))


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_one(patient_id: str, store: StoreDep):
    return await get_patient(store, patient_id)


@router.get("/{patient_id}/programs", response_model=ProgramsResponse)
async def patient_programs(patient_id: str, service: ProgramServiceDep, store: StoreDep):
    await get_patient(store, patient_id)
    return ProgramsResponse(programs=await service.list_programs(patient_id))


@router.get("/{patient_id}/programs/latest", response_model=ProgramResponse | None)
async def patient_latest_program(patient_id: str, service: ProgramServiceDep):
    # None (JSON null) when the patient has no program yet.
    return await service.latest_program(patient_id)
