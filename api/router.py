from fastapi import APIRouter

from api.routes import patients, programs

api_router = APIRouter()

api_router.include_router(patients.router, tags=["patients"], prefix="/patients")
api_router.include_router(programs.router, tags=["programs"], prefix="/programs")
