# filmorate/main.py: app assembly, startup schema check and error translation

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from filmorate.core.logging import configure_logging
from filmorate.core.settings import settings
from filmorate.db.ensure_schema import ensure_schema
from filmorate.db.session import dispose_engine, get_engine
from filmorate.exceptions import (
    ContentNotFoundError,
    DomainValidationError,
    FilmorateError,
    NotFoundError,
    StorageIntegrityError,
)
from filmorate.routes.films import router as films_router
from filmorate.routes.reference import genres_router, mpa_router
from filmorate.routes.users import router as users_router

log = logging.getLogger("startup")


@asynccontextmanager
async def lifespan(_: FastAPI):
    await ensure_schema(get_engine(), seed=settings.seed_reference_data)
    try:
        yield
    finally:
        await dispose_engine()


configure_logging(settings.log_level)

app = FastAPI(
    title="Filmorate API",
    version="1.0.0",
    lifespan=lifespan,
)

# ───────────────── Error translation ─────────────────
_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ContentNotFoundError, 404),
    (DomainValidationError, 400),
    (StorageIntegrityError, 409),
)


def status_for(exc: FilmorateError) -> int:
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(exc, kind):
            return status
    return 400


@app.exception_handler(FilmorateError)
async def handle_domain_error(_: Request, exc: FilmorateError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": exc.error, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body"
        errors[field] = err.get("msg", "invalid value")
    return JSONResponse(status_code=400, content=errors)


# ───────────────── Health ─────────────────
@app.get("/health", tags=["default"])
async def health() -> Dict[str, Any]:
    return {"ok": True}


# ───────────────── Routers ─────────────────
for router in (films_router, users_router, genres_router, mpa_router):
    app.include_router(router)
    log.info("Mounted router: %s", router.prefix)
