"""ASGI entry module (``notemap.api.main:app``)."""

from __future__ import annotations

from notemap.api.app import create_app

app = create_app()
