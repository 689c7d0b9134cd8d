# ============================================================
# Dummy Data Studio FastAPI App
# ------------------------------------------------------------
# Wires everything together:
#   - Single-page UI at "/"
#   - Per-page generation sessions (form state + accumulated output)
#   - Streaming generation via Gemini, OpenAI, Ollama or Echo clients
#   - Download of the finished output as dummy-data.<ext>
# ============================================================

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from fastapi import APIRouter, FastAPI, HTTPException, Request, Response
from fastapi.responses import HTMLResponse, StreamingResponse
from pydantic import BaseModel

# --- Local imports ---
from .settings import Settings, settings
from .errors import EmptyPromptError, GenerationError, InvalidOptionError
from .export import build_download
from .generate import DataGenerator, build_model_client
from .logging_setup import configure_logging
from .session import GENERIC_FAILURE, GenerationSession, SessionStore
from .types import (
    DATE_FORMAT_LABELS,
    DECIMAL_CHOICES,
    DEFAULT_PRECISION,
    DEFAULT_PROMPT,
    EXAMPLE_PROMPTS,
    DataFormat,
    DateFormat,
    GenerationOptions,
)

logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).with_name("static") / "index.html"

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class GenerateRequest(BaseModel):
    prompt: str = ""
    format: DataFormat = DataFormat.JSON
    date_format: DateFormat = DateFormat.ISO_8601
    decimal_places: str = DEFAULT_PRECISION


class PreviewPayload(BaseModel):
    text: str
    total_lines: int
    remaining_lines: int
    truncated: bool
    notice: Optional[str] = None


class SessionPayload(BaseModel):
    id: str
    prompt: str
    format: str
    date_format: str
    decimal_places: str
    generated_text: str
    is_loading: bool
    error: Optional[str] = None
    can_export: bool
    preview: PreviewPayload


class OptionsPayload(BaseModel):
    formats: List[str]
    date_formats: List[Dict[str, str]]
    decimal_places: List[str]
    examples: List[Dict[str, str]]
    defaults: Dict[str, Any]


router = APIRouter()

# ------------------------------------------------------------
# 🧠 Helpers
# ------------------------------------------------------------
def _sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


def _session_or_404(request: Request, session_id: str) -> GenerationSession:
    session = _sessions(request).get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _snapshot(request: Request, session: GenerationSession) -> dict:
    return session.snapshot(request.app.state.settings.PREVIEW_MAX_LINES)

# ------------------------------------------------------------
# 🖥️ UI
# ------------------------------------------------------------
@router.get("/", response_class=HTMLResponse)
def index():
    return INDEX_HTML.read_text(encoding="utf-8")


@router.get("/api/options", response_model=OptionsPayload)
def options(request: Request):
    return OptionsPayload(
        formats=[f.value for f in DataFormat],
        date_formats=[{"value": d.value, "label": DATE_FORMAT_LABELS[d]} for d in DateFormat],
        decimal_places=list(DECIMAL_CHOICES),
        examples=[{"label": e.label, "text": e.text} for e in EXAMPLE_PROMPTS],
        defaults={
            "prompt": DEFAULT_PROMPT,
            "format": DataFormat.JSON.value,
            "date_format": DateFormat.ISO_8601.value,
            "decimal_places": DEFAULT_PRECISION,
            "preview_max_lines": request.app.state.settings.PREVIEW_MAX_LINES,
        },
    )

# ------------------------------------------------------------
# 🗂️ Sessions
# ------------------------------------------------------------
@router.post("/api/sessions", response_model=SessionPayload, status_code=201)
def create_session(request: Request):
    session = _sessions(request).create()
    logger.debug("session %s created", session.id)
    return _snapshot(request, session)


@router.get("/api/sessions/{session_id}", response_model=SessionPayload)
def get_session(session_id: str, request: Request):
    return _snapshot(request, _session_or_404(request, session_id))


@router.delete("/api/sessions/{session_id}", status_code=204)
def discard_session(session_id: str, request: Request):
    if not _sessions(request).discard(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)


@router.post("/api/sessions/{session_id}/examples/{label}", response_model=SessionPayload)
def apply_example(session_id: str, label: str, request: Request):
    session = _session_or_404(request, session_id)
    try:
        session.apply_example(label)
    except InvalidOptionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _snapshot(request, session)

# ------------------------------------------------------------
# 💬 Generation (streamed text/plain)
# ------------------------------------------------------------
@router.post("/api/sessions/{session_id}/generate")
def generate(session_id: str, req: GenerateRequest, request: Request):
    session = _session_or_404(request, session_id)
    try:
        opts = GenerationOptions.parse(req.date_format.value, req.decimal_places)
    except InvalidOptionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        session.begin(req.prompt, req.format, opts)
    except EmptyPromptError as e:
        raise HTTPException(status_code=400, detail=str(e))

    chunks = session.stream(request.app.state.generator)
    # Pull the first fragment eagerly so an upstream failure before any output
    # can still be reported with a proper status code.
    try:
        first = next(chunks)
    except StopIteration:
        first = None
    except GenerationError:
        raise HTTPException(status_code=502, detail=GENERIC_FAILURE)

    def body():
        if first is not None:
            yield first
        try:
            yield from chunks
        except GenerationError:
            # headers are already sent; the failure is visible on the session state
            return

    return StreamingResponse(
        body(),
        media_type="text/plain; charset=utf-8",
        headers={"X-Session-Id": session.id, "Cache-Control": "no-cache"},
    )

# ------------------------------------------------------------
# 💾 Export
# ------------------------------------------------------------
@router.get("/api/sessions/{session_id}/download")
def download(session_id: str, request: Request, format: Optional[DataFormat] = None):
    session = _session_or_404(request, session_id)
    file = build_download(session.generated_text, format or session.format)
    if file is None:
        return Response(status_code=204)
    return Response(
        content=file.data,
        media_type=file.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{file.filename}"'},
    )

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@router.get("/healthz")
def healthz(request: Request):
    s: Settings = request.app.state.settings
    return {
        "ok": True,
        "env": s.ENV,
        "debug": s.DEBUG,
        "app": s.app_name,
        "engine": type(request.app.state.generator.model_client).__name__,
    }


@router.get("/health")
def health(request: Request):
    return {"status": "ok", "env": request.app.state.settings.ENV}

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
def create_app(model_client=None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the app. Without an explicit client one is picked from settings at startup,
    and a missing API key aborts startup (MissingApiKeyError)."""
    cfg = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(cfg.LOG_LEVEL, cfg.LOG_DIR)
        client = model_client if model_client is not None else build_model_client(cfg)
        app.state.generator = DataGenerator(model_client=client)
        logger.info("%s ready provider=%s engine=%s", cfg.app_name, cfg.LLM_PROVIDER, type(client).__name__)
        yield
        logger.info("%s shutting down, dropping %d session(s)", cfg.app_name, len(app.state.sessions))

    app = FastAPI(
        title=cfg.app_name,
        version="1.0",
        lifespan=lifespan,
        docs_url="/docs" if cfg.DEBUG else None,
        redoc_url="/redoc" if cfg.DEBUG else None,
    )
    app.state.settings = cfg
    app.state.sessions = SessionStore(max_sessions=cfg.SESSION_MAX, idle_seconds=cfg.SESSION_IDLE_SECONDS)
    app.include_router(router)
    return app


app = create_app()
