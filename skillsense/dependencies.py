"""Request dependencies shared by the routers."""

from __future__ import annotations

from fastapi import HTTPException, status

from .repositories._common import normalize_user_id


def require_user_id(user_id: str) -> str:
    """Resolve the ``{user_id}`` path segment, rejecting blank ids with 400."""
    try:
        return normalize_user_id(user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


__all__ = ["require_user_id"]
