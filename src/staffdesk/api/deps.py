from __future__ import annotations

from fastapi import Header, Request

from staffdesk.core.engine import CRMEngine


def get_engine(request: Request) -> CRMEngine:
    return request.app.state.engine


def get_user(x_user: str | None = Header(default=None)) -> str | None:
    """Caller identity from the X-User header; services fall back to the default actor when it is absent."""
    return x_user
