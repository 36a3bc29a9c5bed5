"""
Frontend HTML routes for the demonstration form.

Routes:
    GET  /   → index.html (every component, empty form)
    POST /   → index.html with inline errors (422) or confirmation.html (200)

Form bodies are parsed into ``ApplicationForm``; a pydantic
``ValidationError`` becomes a ``ModelState`` that the components read.
"""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import (
    CONTACT_METHODS,
    COUNTRIES,
    DESCRIPTION_MAX_WORDS,
    INTERESTS,
    ApplicationForm,
    nest_form_data,
)
from gds_components import ModelState, OptionProjection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None

LOOKUP_URL = "/api/v1/lookup/organisations"
LIST_FIELDS = frozenset({"interests"})


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised — call set_templates() first")
    return _templates


def project_team_member(member) -> OptionProjection:
    return OptionProjection(
        value="true",
        label=member.name,
        checked=bool(member.selected),
        hidden_fields={"Id": member.id, "Name": member.name},
    )


def _page_context(request: Request, form: ApplicationForm, errors: ModelState) -> dict:
    return {
        "request": request,
        "form": form,
        "errors": errors,
        "lookup_url": LOOKUP_URL,
        "contact_methods": CONTACT_METHODS,
        "countries": COUNTRIES,
        "interests": INTERESTS,
        "description_max_words": DESCRIPTION_MAX_WORDS,
        "project_team_member": project_team_member,
    }


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request) -> HTMLResponse:
    """Empty application form."""
    return _tmpl().TemplateResponse(
        request, "index.html", _page_context(request, ApplicationForm.blank(), ModelState())
    )


@router.post("/", response_class=HTMLResponse, include_in_schema=False)
async def submit(request: Request) -> HTMLResponse:
    """Validate the posted form; re-render with errors or confirm."""
    body = await request.form()
    data = nest_form_data(list(body.multi_items()), LIST_FIELDS)
    try:
        form = ApplicationForm.model_validate(data)
    except ValidationError as exc:
        errors = ModelState.from_validation_error(exc)
        logger.info("form rejected fields=%s", ",".join(errors.keys()))
        return _tmpl().TemplateResponse(
            request,
            "index.html",
            _page_context(request, ApplicationForm.redisplay(data), errors),
            status_code=422,
        )

    return _tmpl().TemplateResponse(
        request,
        "confirmation.html",
        {
            "request": request,
            "form": form,
            "contact_methods": dict(CONTACT_METHODS),
            "countries": dict(COUNTRIES),
            "interests": dict(INTERESTS),
        },
    )


# ── Error pages ───────────────────────────────────────────────────────────────

def register_error_handlers(app: FastAPI) -> None:
    """Render HTML 404 pages for browser routes; API routes keep JSON."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and not request.url.path.startswith("/api/"):
            return _tmpl().TemplateResponse(
                request, "404.html", {"request": request}, status_code=404
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "status_code": exc.status_code},
            headers=getattr(exc, "headers", None),
        )
