import logging
import os
from pathlib import Path
from typing import Any, List

from fastapi import Body, Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

# ── local modules ───────────────────────────────────────────────────
from .db import Base, engine, get_db
from .errors import EventError, InputError, StorageError
from .logging_config import setup_logging
from .repository import EventRepository, SqlEventRepository
from .schemas import Envelope, EventOut
from .service import EventService
# ────────────────────────────────────────────────────────────────────

logger = logging.getLogger(__name__)

app = FastAPI(title="Eventdesk API")

# ───────────────────────── CORS ─────────────────────────────────────
from fastapi.middleware.cors import CORSMiddleware

def _clean(s: str | None) -> str | None:
    return s.strip().rstrip("/") if s and s.strip() else None

FRONTEND_ORIGIN = _clean(os.getenv("FRONTEND_ORIGIN")) or "http://localhost:3000"
_raw_extra = os.getenv("EXTRA_CORS_ORIGINS", "")
EXTRA = [x for x in (_clean(p) for p in _raw_extra.split(",")) if x]
allow_origins = ["*"] if "*" in EXTRA else [o for o in {FRONTEND_ORIGIN, *EXTRA} if o]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,
)

# ───────────────────────── Error envelopes ──────────────────────────
def _error_response(status_code: int, message: str) -> JSONResponse:
    body = Envelope[Any](success=False, error=message).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)

@app.exception_handler(EventError)
async def event_error_handler(request: Request, exc: EventError):
    return _error_response(exc.status_code, exc.message)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # FastAPI only gets here for bodies that are not JSON at all
    return _error_response(InputError.status_code, InputError.message)

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(StorageError.status_code, StorageError.message)

# ───────────────────────── DB migrations (optional) ─────────────────
from alembic import command
from alembic.config import Config

def run_migrations() -> None:
    app_dir = Path(__file__).resolve().parent
    cfg = Config()
    cfg.set_main_option("script_location", str(app_dir / "migrations"))
    if "DATABASE_URL" in os.environ:
        cfg.set_main_option("sqlalchemy.url", os.environ["DATABASE_URL"])
    command.upgrade(cfg, "head")

@app.on_event("startup")
def on_startup():
    setup_logging()
    if os.getenv("AUTO_MIGRATE") == "1":
        logger.info("Running migrations")
        run_migrations()
    if os.getenv("CREATE_TABLES") == "1":
        Base.metadata.create_all(engine)

# ───────────────────────── Lifecycle & health ───────────────────────
@app.get("/health")
def health_check():
    return {"status": "ok"}

@app.get("/dbcheck")
def dbcheck(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}

# ───────────────────────── Dependencies ─────────────────────────────
def get_repository(db: Session = Depends(get_db)) -> EventRepository:
    return SqlEventRepository(db)

def get_service(repo: EventRepository = Depends(get_repository)) -> EventService:
    return EventService(repo)

# ───────────────────────── Event CRUD ───────────────────────────────
# Ids are taken as text so malformed ones get the envelope's "Invalid ID"
# instead of FastAPI's 422.

@app.get("/events", response_model=Envelope[List[EventOut]], response_model_exclude_none=True)
def list_events(service: EventService = Depends(get_service)):
    return Envelope[List[EventOut]](success=True, data=service.list())

@app.get("/events/{event_id}", response_model=Envelope[EventOut], response_model_exclude_none=True)
def read_event(event_id: str, service: EventService = Depends(get_service)):
    return Envelope[EventOut](success=True, data=service.get(event_id))

@app.post(
    "/events",
    response_model=Envelope[EventOut],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_event(payload: Any = Body(None), service: EventService = Depends(get_service)):
    return Envelope[EventOut](success=True, data=service.create(payload))

@app.put("/events/{event_id}", response_model=Envelope[EventOut], response_model_exclude_none=True)
def update_event(event_id: str, payload: Any = Body(None), service: EventService = Depends(get_service)):
    return Envelope[EventOut](success=True, data=service.update(event_id, payload))

@app.delete("/events/{event_id}", response_model=Envelope[Any], response_model_exclude_none=True)
def delete_event(event_id: str, service: EventService = Depends(get_service)):
    service.delete(event_id)
    return Envelope[Any](success=True, message="Event deleted")
