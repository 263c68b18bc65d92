from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.router import api_router
from core.config import settings
from core.errors import NotFoundError, StorageError, UpstreamFetchError, ValidationError
from core.logging import setup_logging
from database.session import init_db


def _error(status_code: int, detail: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, **extra})


def create_app() -> FastAPI:
    setup_logging(settings)
    app = FastAPI(title=settings.app_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.message, field=exc.field)

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(UpstreamFetchError)
    async def _upstream_error(request: Request, exc: UpstreamFetchError):
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(StorageError)
    async def _storage_error(request: Request, exc: StorageError):
        code = status.HTTP_409_CONFLICT if exc.conflict else status.HTTP_503_SERVICE_UNAVAILABLE
        return _error(code, str(exc), phase=exc.phase, orphan_possible=exc.orphan_possible)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


@app.on_event("startup")
async def _startup():
    await init_db()
