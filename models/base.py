from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # Naive UTC, matching how SQLite stores DATETIME columns.
    return datetime.now(timezone.utc).replace(tzinfo=None)
