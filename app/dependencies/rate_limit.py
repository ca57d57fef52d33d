"""Rate limiting for the public write endpoints (contact form)."""

from slowapi import Limiter
from slowapi.util import get_remote_address

DEFAULT_CONTACT_LIMIT = "5/minute"


def contact_limit(config: dict) -> str:
    return (config.get("rate_limit", {}) or {}).get("contact", DEFAULT_CONTACT_LIMIT)


def create_limiter(config: dict) -> Limiter:
    """One limiter per app, switched by rate_limit.enabled (in-memory storage)."""
    rate_cfg = config.get("rate_limit", {}) or {}
    return Limiter(key_func=get_remote_address, enabled=rate_cfg.get("enabled", True))
