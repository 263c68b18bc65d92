from datetime import date, timedelta

from schemas.patient import PatientCreate
from services.patient_service import create_patient

DEMO_PATIENT_EMAIL = "demo.patient@rehabweek.gr"


async def seed_demo_data(store) -> None:
    if await store.fetch_patient_by_email(DEMO_PATIENT_EMAIL):
        return

    await create_patient(
        store,
        PatientCreate(
            full_name="Demo Patient",
            email=DEMO_PATIENT_EMAIL,
            phone="+30 210 0000000",
            next_session_date=date.today() + timedelta(days=2),
            affected_area="knee",
            pain_level=6,
            difficulty_level=5,
            symptom_description="Πόνος στο γόνατο μετά από τρέξιμο.",
            activity_level="moderate",
        ),
    )
