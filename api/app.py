"""
FastAPI application factory for the GOV.UK form components demo host.

Usage:
    python -m api.app                               # Dev server on port 8000
    APP_DB_PATH=/data/orgs.sqlite python -m api.app

Serves:
    /                                   demonstration form (every component)
    /api/v1/lookup/organisations        autocomplete lookup (names)
    /api/v1/lookup/organisations/records  autocomplete lookup ({label, value})
    /static/gds/js/gds-autocomplete.js  browser half of the autocomplete
    /health                             liveness + database check

OpenAPI docs available at http://localhost:8000/docs after starting.

Logging: plain text by default, newline-delimited JSON when
APP_LOG_FORMAT=json.  Every response carries an X-Request-ID header.
"""

import json
import logging
import sqlite3
import time
import uuid
import warnings
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

import api.database as _db_mod
from api.database import get_db_path
from api.routes import frontend as frontend_routes
from api.routes import lookup
from gds_components.errors import ComponentError
from gds_components.templating import register_components
from utils.config import AppConfig

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("gds_forms_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)

_PROJECT_ROOT = Path(__file__).parent.parent
_TEMPLATES_DIR = _PROJECT_ROOT / "templates"
_STATIC_DIR = _PROJECT_ROOT / "gds_components" / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warn on startup when the organisations database is missing."""
    db_path = get_db_path()
    if not db_path.exists():
        warnings.warn(
            f"Database not found at {db_path}. Run 'python -m api.seed' first.",
            stacklevel=2,
        )
    yield


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Override the database path (useful for testing).

    Returns:
        Configured FastAPI application instance.
    """
    if db_path is not None:
        _db_mod.set_db_path(db_path)
        lookup.clear_cache()

    app = FastAPI(
        title="GOV.UK Form Components",
        summary="Demonstration host for the GOV.UK form components and their autocomplete lookup.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "lookup",
                "description": "Organisation lookups consumed by the autocomplete field.",
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )

    # ── CORS middleware ───────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its duration and tag it with a request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if _cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, path, response.status_code, duration_ms, request_id,
            )
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.exception("unhandled error path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "status_code": 500,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"error": "Bad request", "detail": str(exc), "status_code": 400},
        )

    # Component misuse inside a page template is a 500, not a 400
    @app.exception_handler(ComponentError)
    async def component_error_handler(request: Request, exc: ComponentError):
        _logger.error("component error path=%s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Component error", "detail": str(exc), "status_code": 500},
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if the API is running and can reach the database."""
        db_path = get_db_path()
        if not db_path.exists():
            return JSONResponse(
                status_code=503,
                content={"status": "no_database", "database": str(db_path)},
            )
        try:
            conn = sqlite3.connect(str(db_path))
            try:
                count = conn.execute("SELECT COUNT(*) FROM organisations").fetchone()[0]
            finally:
                conn.close()
        except sqlite3.Error as e:
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "error": str(e)},
            )
        return {"status": "ok", "database": str(db_path), "organisations": count}

    # ── Register routers ──────────────────────────────────────────────────────

    app.include_router(lookup.router, prefix="/api/v1")

    # ── Static files + Jinja2 templates ───────────────────────────────────────

    app.mount("/static/gds", StaticFiles(directory=str(_STATIC_DIR)), name="gds-static")

    templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))
    register_components(templates.env)

    frontend_routes.set_templates(templates)
    app.include_router(frontend_routes.router)
    frontend_routes.register_error_handlers(app)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
