from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from core.config import settings
from core.logging import get_logger
from database.store import RehabStore
from models.base import Base
from models.patient import Patient  # noqa: F401 (registers table)
from models.program import Program, ProgramExercise  # noqa: F401 (registers tables)
from services.seed_service import seed_demo_data

logger = get_logger(__name__)


def make_engine(database_url: str) -> AsyncEngine:
    bind = create_async_engine(database_url)

    if database_url.startswith("sqlite"):
        # SQLite leaves FK enforcement (and ON DELETE CASCADE) off unless asked per connection.
        @event.listens_for(bind.sync_engine, "connect")
        def _sqlite_foreign_keys(dbapi_conn, _record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return bind


def make_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = make_engine(settings.database_url)
SessionLocal = make_sessionmaker(engine)


async def init_db(bind: AsyncEngine | None = None, seed: bool | None = None) -> None:
    # Create tables (MVP). For production, use Alembic migrations.
    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if seed is None:
        seed = settings.seed_demo_data
    if seed:
        # Idempotent: only creates the demo patient when missing.
        await seed_demo_data(RehabStore(make_sessionmaker(bind)))
    logger.info("database ready (seeded=%s)", seed)
