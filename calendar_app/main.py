from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
import uvicorn

from calendar_app.api.events import router as events_router
from calendar_app.config import Settings, settings
from calendar_app.core.env import load_env
from calendar_app.core.errors import CalendarError
from calendar_app.logging import configure_logging
from calendar_app.services.events.service import EventService
from calendar_app.services.events.store import EventStore, build_event_store

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(messages) or "Validation failed"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CalendarError)
    async def calendar_error_handler(request: Request, exc: CalendarError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": _format_validation_errors(exc)})


def _register_frontend(app: FastAPI, config: Settings) -> None:
    if not (config.SERVE_STATIC or config.is_production):

        @app.get("/", response_class=PlainTextResponse)
        async def root() -> str:
            return "Calendar App API is running..."

        return

    static_dir = Path(config.STATIC_DIR).resolve()
    index_file = static_dir / "index.html"
    logger.info("Serving front end from %s", static_dir)

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str) -> FileResponse:
        candidate = (static_dir / full_path).resolve()
        if full_path and candidate.is_relative_to(static_dir) and candidate.is_file():
            return FileResponse(candidate)
        if not index_file.is_file():
            raise HTTPException(status_code=404, detail="Front end build not found")
        return FileResponse(index_file)


def create_app(config: Settings | None = None, store: EventStore | None = None) -> FastAPI:
    config = config or settings
    store = store if store is not None else build_event_store(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Calendar API starting (env=%s, store=%s)", config.ENV, type(store).__name__)
        yield
        close = getattr(store, "close", None)
        if close is not None:
            close()
        logger.info("Calendar API stopped")

    app = FastAPI(title="Calendar App API", lifespan=lifespan)
    app.state.event_service = EventService(store)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)
    app.include_router(events_router)
    _register_frontend(app, config)
    return app


if __name__ == "__main__":
    load_env()
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(create_app(), host=settings.HOST, port=settings.PORT)
