"""
app/main.py — Portfolio public API
===================================
Read-only portfolio content plus the contact form. Records are authored in
the default language; every read route overlays stored translations for the
requested language and falls back per field to the default-language value.

Language support:
  Every data route accepts language via two mechanisms (priority order):
    1. ?lang=en  query parameter
    2. Accept-Language: en-US,en;q=0.9  HTTP header (first entry only)
  Anything unsupported resolves to the default language (config i18n block).
  Every response carries "meta": {"lang", "lang_label"} and Content-Language.

Routes:
  GET  /api/v1/about             → About section (translated)
  GET  /api/v1/projects          → projects (translated)
  GET  /api/v1/skills            → skills (translated)
  GET  /api/v1/experiences       → work experience (translated)
  GET  /api/v1/education         → education (translated)
  GET  /api/v1/languages         → spoken languages (translated)
  GET  /api/v1/interests         → interests (translated)
  POST /api/v1/contact           → contact form (rate limited)
  GET  /api/v1/i18n              → default + supported languages
  GET  /health                   → liveness check

The admin API lives in admin/main.py.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.dependencies.context import configure_state
from app.dependencies.rate_limit import contact_limit, create_limiter
from app.errors import install_error_handlers
from app.routers import contact, portfolio
from app.services.language import LANG_LABELS
from config_loader import load_config
from db.models import init_db

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


def create_app(config: Optional[dict] = None, db_path: Optional[Path] = None) -> FastAPI:
    """Create and configure the public portfolio application."""
    config = load_config() if config is None else config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.db_path)
        logger.info(f"Portfolio API ready (db={app.state.db_path}, default_lang={app.state.default_lang})")
        yield

    app = FastAPI(
        title="Portfolio API",
        description="Personal portfolio content with per-field translations.",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
    )
    configure_state(app, config, db_path)

    limiter = create_limiter(config)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    install_error_handlers(app)

    security_cfg = config.get("security", {}) or {}
    app.add_middleware(
        CORSMiddleware,
        allow_origins=security_cfg.get("cors_origins", ["*"]),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(portfolio.router)
    app.include_router(contact.build_router(limiter, contact_limit(config)))

    @app.get("/api/v1/i18n", summary="Supported languages")
    async def languages_info(request: Request):
        state = request.app.state
        return {
            "status": "success",
            "data": {
                "default": state.default_lang,
                "supported": [
                    {"code": code, "label": LANG_LABELS.get(code, code)}
                    for code in state.supported_langs
                ],
                "negotiation": "?lang=en  or  Accept-Language: en header",
            },
        }

    @app.get("/health", summary="Liveness check")
    async def health():
        return {"status": "ok", "version": APP_VERSION}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    server_cfg = app.state.config.get("server", {})
    uvicorn.run(app, host=server_cfg.get("host", "0.0.0.0"),
                port=server_cfg.get("port", 8080), log_level="info")
