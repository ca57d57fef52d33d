# Admin Access Control
# Purpose: Authenticate the portfolio owner and guard /api/v1/admin/* routes
# Main functions: load_admin_settings(), authenticate_admin(), create_access_token(),
#                 get_current_admin_user()
# Dependent files: admin/main.py (login), admin/routers/admin.py (router-level guard)

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import hmac
import logging
import os
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
import jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ADMIN_ROLE = "ADMIN"
LOGIN_PATH = "/api/auth/login"


@dataclass(frozen=True)
class AdminSettings:
    username:       str
    password:       str
    secret_key:     str
    expire_minutes: int


def load_admin_settings(environ=os.environ) -> AdminSettings:
    """Single-owner credentials and JWT settings from ADMIN_* env vars."""
    secret_key = environ.get("ADMIN_SECRET_KEY", "")
    if not secret_key:
        secret_key = secrets.token_urlsafe(48)
        logger.warning("ADMIN_SECRET_KEY is empty, using a random key: tokens die with the process")
    if not environ.get("ADMIN_PASSWORD"):
        logger.warning("ADMIN_PASSWORD is empty, admin login is disabled")
    return AdminSettings(
        username=environ.get("ADMIN_USERNAME", "admin"),
        password=environ.get("ADMIN_PASSWORD", ""),
        secret_key=secret_key,
        expire_minutes=int(environ.get("ADMIN_TOKEN_EXPIRE_MINUTES", "60")),
    )


SETTINGS = load_admin_settings()

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=LOGIN_PATH)


def authenticate_admin(username: str, password: str, settings: AdminSettings = SETTINGS) -> bool:
    if not settings.password:
        return False
    user_ok = hmac.compare_digest(username.encode(), settings.username.encode())
    pass_ok = hmac.compare_digest(password.encode(), settings.password.encode())
    return user_ok and pass_ok


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None,
                        settings: AdminSettings = SETTINGS) -> str:
    issued = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.expire_minutes)
    claims = {"sub": subject, "role": ADMIN_ROLE, "iat": issued, "exp": issued + lifetime}
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_admin_user(token: str = Depends(oauth2_scheme)) -> dict:
    """
    Router-level dependency for the admin API.
    Returns {"username", "role"} from a valid admin JWT, raises 401 otherwise.
    """
    try:
        claims = jwt.decode(token, SETTINGS.secret_key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise unauthorized("Session expired, please log in again")
    except jwt.InvalidTokenError:
        raise unauthorized("Invalid authentication token")

    if not claims.get("sub") or claims.get("role") != ADMIN_ROLE:
        raise unauthorized("Invalid authentication token")
    return {"username": claims["sub"], "role": ADMIN_ROLE}
