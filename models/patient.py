import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, utcnow


class Patient(Base):
    __tablename__ = "patients"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, index=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    next_session_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Clinical extension fields collected by the intake wizard (all optional).
    affected_area: Mapped[str | None] = mapped_column(String, nullable=True)
    pain_level: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0-10
    difficulty_level: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0-10
    symptom_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    aggravating_factors: Mapped[str | None] = mapped_column(Text, nullable=True)
    relieving_factors: Mapped[str | None] = mapped_column(Text, nullable=True)
    occupation: Mapped[str | None] = mapped_column(String, nullable=True)
    activity_level: Mapped[str | None] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
