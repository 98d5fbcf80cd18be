from __future__ import annotations

from fastapi import HTTPException, status

from app.career.errors import Unauthorized
from app.core.config import settings
from app.storage.store import CareerStore


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        return ""
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def resolve_user_id(authorization: str | None, store: CareerStore) -> str:
    if not authorization:
        raise Unauthorized("No authorization header")
    token = _bearer_token(authorization)
    user_id = store.get_user_id_for_token(token) if token else None
    if not user_id:
        raise Unauthorized()
    return user_id


def check_api_key(x_api_key: str | None) -> None:
    if not settings.admin_api_key or x_api_key != settings.admin_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please provide a valid admin API key.",
        )
