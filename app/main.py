"""FastAPI entrypoint for the user directory service."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.api.v1.api import api_router
from app.core.config import settings
from app.db import session as db_session
from app.db.base import Base
from app.db.migrations import ensure_sqlite_schema
from app.db.seed import ensure_demo_users
from app.db.session import get_db
from app.services.user_service import USER_PREVIEW_LIMIT, fetch_users

BASE_DIR = Path(__file__).resolve().parent

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api/v1")
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def render_template(request: Request, name: str, context: dict | None = None, status_code: int = 200):
    """Render a template with the request object and shared app context."""
    payload = {"request": request, "app_name": settings.app_name}
    if context:
        payload.update(context)
    return templates.TemplateResponse(request, name, payload, status_code=status_code)


@app.on_event("startup")
def startup() -> None:
    Base.metadata.create_all(bind=db_session.engine)
    ensure_sqlite_schema(db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            created = ensure_demo_users(session)
            logger.info("[BOOTSTRAP] demo users created: %s", created)
        except Exception:
            logger.exception("[BOOTSTRAP] Seed failed; continuing startup.")


@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(url="/admin/users", status_code=303)


@app.get("/admin/users", response_class=HTMLResponse)
def admin_users(request: Request, db: Session = Depends(get_db)):
    result = fetch_users(db)
    if not result.ok:
        return render_template(
            request,
            "admin_users.html",
            {"users": [], "error": result.failure.message, "limit": USER_PREVIEW_LIMIT},
            status_code=500,
        )
    return render_template(
        request,
        "admin_users.html",
        {"users": result.records, "error": None, "limit": USER_PREVIEW_LIMIT},
    )
