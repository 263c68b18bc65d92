import base64

from fastapi import APIRouter, status

from api.deps import ProgramServiceDep, StoreDep
from schemas.program import GeneratedProgram, GenerateRequest, ProgramDetailResponse, ProgramResponse, ProgramSaveRequest
from services.report_service import build_program_export_json, build_program_pdf_bytes

router = APIRouter()


@router.post("/generate", response_model=GeneratedProgram)
async def generate_program(payload: GenerateRequest, service: ProgramServiceDep):
    return await service.generate(payload.patient_id, payload.start_date, seed=payload.seed)


@router.post("", response_model=ProgramResponse, status_code=status.HTTP_201_CREATED)
async def save_program(payload: ProgramSaveRequest, service: ProgramServiceDep):
    return await service.save(payload.patient_id, payload.start_date, payload.notes, payload.program)


@router.get("/{program_id}", response_model=ProgramDetailResponse)
async def get_program(program_id: str, service: ProgramServiceDep):
    return await service.get_program(program_id)


@router.get("/{program_id}/export.json")
async def export_program_json(program_id: str, service: ProgramServiceDep, store: StoreDep):
    program = await service.get_program(program_id)
    patient = await store.fetch_patient(program["patient_id"])
    return build_program_export_json(program, patient)


@router.get("/{program_id}/export.pdf")
async def export_program_pdf(program_id: str, service: ProgramServiceDep, store: StoreDep):
    program = await service.get_program(program_id)
    patient = await store.fetch_patient(program["patient_id"])
    pdf = build_program_pdf_bytes(program, patient)
    return {
        "filename": f"rehab_program_{program_id}.pdf",
        "content_type": "application/pdf",
        "base64": base64.b64encode(pdf).decode("utf-8"),
    }
