"""
app/routers — FastAPI Routers Module
======================================

Purpose:
  Public portfolio endpoints, split by concern.

Routers:
  - portfolio: read-only portfolio content with translation overlay
  - contact: rate-limited contact form
"""
