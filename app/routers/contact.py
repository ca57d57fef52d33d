"""
app/routers/contact.py — Public contact form
=============================================
  POST /api/v1/contact  → store a message (201), rate limited per client IP

The router is built per app so the limiter and its limit string come from
that app's config.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, Request, status
from slowapi import Limiter

from app.dependencies.context import db
from app.schemas import ContactMessage, ContactMessageIn, dump
from db.models import create_message

logger = logging.getLogger(__name__)


def build_router(limiter: Limiter, limit: str) -> APIRouter:
    router = APIRouter(prefix="/api/v1/contact", tags=["Contact"])

    @router.post("", status_code=status.HTTP_201_CREATED, summary="Send contact message")
    @limiter.limit(limit)
    async def send_message(
        request: Request,
        body: ContactMessageIn,
        conn: sqlite3.Connection = Depends(db),
    ):
        logger.info(f"Receiving contact message from: {body.email}")
        row = create_message(conn, body.name, body.email, body.subject, body.message)
        conn.commit()
        logger.info(f"Contact message saved with ID: {row['id']}")
        return {"status": "success", "data": dump(ContactMessage.model_validate(row))}

    return router
