from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field


class PatientCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str | None = None
    next_session_date: date | None = None

    affected_area: str | None = None
    pain_level: int | None = Field(None, ge=0, le=10)
    difficulty_level: int | None = Field(None, ge=0, le=10)
    symptom_description: str | None = None
    aggravating_factors: str | None = None
    relieving_factors: str | None = None
    occupation: str | None = None
    activity_level: str | None = None


class PatientResponse(BaseModel):
    id: str
    full_name: str
    email: str
    phone: str | None = None
    next_session_date: date | None = None
    affected_area: str | None = None
    pain_level: int | None = None
    difficulty_level: int | None = None
    created_at: datetime


class PatientsResponse(BaseModel):
    patients: list[PatientResponse]
