import asyncio
from contextlib import asynccontextmanager, suppress
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CHOOSER_DB_V1, CORS_ORIGINS, PORT, RETENTION_INTERVAL
from .db import Database
from .errors import ChooserError
from .log import get_logger
from .v1 import init_db as init_v1
from .v1.retention import retention_loop
from .v1.routes import router as v1_router

log = get_logger("chooser.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: schema + seed, optional retention loop
    init_v1(app.state.v1_db)
    sweeper = None
    if RETENTION_INTERVAL > 0:
        sweeper = asyncio.create_task(retention_loop(app.state.v1_db, RETENTION_INTERVAL))
    app.state.sweeper = sweeper
    yield
    if sweeper is not None:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper


def _describe_validation(exc: RequestValidationError) -> str:
    errors = exc.errors()
    missing = [
        str(err["loc"][-1])
        for err in errors
        if err.get("type") == "missing" and len(err.get("loc", ())) > 1
    ]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    if any(err.get("type") == "missing" for err in errors):
        return "Request body is required"
    if any(err.get("type") == "json_invalid" for err in errors):
        return "Request body must be valid JSON"
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:])
    return f"Invalid field {field}: {first.get('msg', 'invalid value')}"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ChooserError)
    async def chooser_error(request: Request, exc: ChooserError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": _describe_validation(exc)}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == 404:
            message = "Endpoint not implemented"
        return JSONResponse({"error": message}, status_code=exc.status_code)

    @app.exception_handler(SQLAlchemyError)
    async def store_error(request: Request, exc: SQLAlchemyError):
        log.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"error": "Database error"}, status_code=500)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(database: Optional[Database] = None) -> FastAPI:
    app = FastAPI(title="Chooser API", lifespan=lifespan)
    app.state.v1_db = database or Database(CHOOSER_DB_V1)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    register_error_handlers(app)

    # each version is its own router + database
    app.include_router(v1_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("chooser.main:app", host="0.0.0.0", port=PORT, log_level="info")
