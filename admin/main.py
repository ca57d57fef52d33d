# Portfolio Admin Application
# Purpose: Content management app for the portfolio owner: login, records, translations, inbox
# Main functions: create_admin_app()
# Dependent files: admin/routers/admin.py, admin/dependencies/access_control.py, app/errors.py

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from admin.dependencies.access_control import (
    ADMIN_ROLE, LOGIN_PATH, authenticate_admin, create_access_token, unauthorized,
)
from admin.routers import admin as admin_router
from app.dependencies.context import configure_state
from app.errors import install_error_handlers
from config_loader import load_config
from db.models import init_db

logger = logging.getLogger(__name__)


class LoginRequest(BaseModel):
    username: str
    password: str


def _admin_origins(config: dict) -> list[str]:
    """ADMIN_CORS_ORIGINS (comma-separated) wins over security.cors_origins."""
    raw = os.environ.get("ADMIN_CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or (config.get("security", {}) or {}).get("cors_origins", ["*"])


def create_admin_app(config: Optional[dict] = None, db_path: Optional[Path] = None) -> FastAPI:
    config = load_config() if config is None else config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(app.state.db_path)
        logger.info(f"Portfolio admin ready (db={app.state.db_path})")
        yield

    app = FastAPI(
        title="Portfolio Admin",
        description="Manage portfolio records, their translations and contact messages.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/admin/docs",
        redoc_url=None,
        openapi_url="/admin/openapi.json",
    )
    configure_state(app, config, db_path)
    install_error_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_admin_origins(config),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.post(LOGIN_PATH, summary="Admin login")
    async def admin_login(body: LoginRequest):
        """Exchange the ADMIN_USERNAME / ADMIN_PASSWORD pair for a bearer JWT."""
        if not authenticate_admin(body.username, body.password):
            logger.warning(f"Rejected admin login for '{body.username}'")
            raise unauthorized("Invalid username or password")
        logger.info(f"Admin '{body.username}' logged in")
        return {
            "access_token": create_access_token(subject=body.username),
            "token_type": "bearer",
            "username": body.username,
            "role": ADMIN_ROLE,
        }

    # JWT enforced by the router's own dependencies
    app.include_router(admin_router.router, prefix="/api/v1/admin", tags=["admin"])
    return app


app = create_admin_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    server_cfg = app.state.config.get("server", {})
    uvicorn.run(app, host=server_cfg.get("host", "0.0.0.0"),
                port=server_cfg.get("admin_port", 8081), log_level="info")
