from __future__ import annotations

from io import BytesIO
from typing import Any

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

PHASE_LABELS = {
    "isometric": "Isometric",
    "concentric": "Concentric",
    "eccentric": "Eccentric",
    "plyometric": "Plyometric",
}

DISCLAIMER = "Home exercise program. Stop and contact your physiotherapist if pain increases."


def _pdf_text(text: str) -> str:
    # Built-in Helvetica has no Greek glyphs; characters outside latin-1 are replaced.
    return text.encode("latin-1", "replace").decode("latin-1")


def _iso(value: Any) -> str | None:
    return value.isoformat() if hasattr(value, "isoformat") else value


def build_program_export_json(program: dict[str, Any], patient: dict[str, Any] | None) -> dict:
    return {
        "disclaimer": DISCLAIMER,
        "program": {
            "id": str(program["id"]),
            "patient_id": str(program["patient_id"]),
            "patient_name": patient.get("full_name") if patient else None,
            "program_start_date": _iso(program["program_start_date"]),
            "program_end_date": _iso(program["program_end_date"]),
            "notes": program.get("notes"),
            "created_at": _iso(program.get("created_at")),
            "exercises": [
                {
                    "exercise_name": e["exercise_name"],
                    "sets": e["sets"],
                    "reps": e["reps"],
                    "phase": e["phase"],
                    "difficulty_level": e.get("difficulty_level"),
                    "pain_level": e.get("pain_level"),
                    "video_link": e.get("video_link"),
                }
                for e in program.get("exercises") or []
            ],
        },
    }


def build_program_pdf_bytes(program: dict[str, Any], patient: dict[str, Any] | None) -> bytes:
    export = build_program_export_json(program, patient)
    prog = export["program"]

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    w, h = A4

    y = h - 0.75 * inch
    c.setFont("Helvetica-Bold", 16)
    c.drawString(0.75 * inch, y, "Weekly Rehabilitation Program")

    y -= 0.3 * inch
    c.setFont("Helvetica", 9)
    c.setFillGray(0.25)
    c.drawString(0.75 * inch, y, export["disclaimer"])
    c.setFillGray(0)

    y -= 0.45 * inch
    c.setFont("Helvetica", 10)
    lines = [
        f"Program ID: {prog['id']}",
        f"Patient: {prog.get('patient_name') or '-'} ({prog['patient_id']})",
        f"Period: {prog['program_start_date']} to {prog['program_end_date']}",
        f"Notes: {prog.get('notes') or '-'}",
    ]
    for line in lines:
        c.drawString(0.75 * inch, y, _pdf_text(line[:110]))
        y -= 0.2 * inch

    y -= 0.15 * inch
    c.setFont("Helvetica-Bold", 11)
    c.drawString(0.75 * inch, y, "Exercises")
    y -= 0.25 * inch
    c.setFont("Helvetica", 9)

    for i, e in enumerate(prog["exercises"], start=1):
        msg = (
            f"{i}. {e['exercise_name']} | {e['sets']} x {e['reps']} | {PHASE_LABELS.get(e['phase'], e['phase'])}"
            f" | difficulty {e.get('difficulty_level') or '-'}/10 | pain {e.get('pain_level') or '-'}/10"
        )
        c.drawString(0.75 * inch, y, _pdf_text(msg[:120]))
        y -= 0.18 * inch
        if y < 1.2 * inch:
            c.showPage()
            c.setFont("Helvetica", 9)
            y = h - 0.75 * inch

    c.showPage()
    c.save()
    return buf.getvalue()
