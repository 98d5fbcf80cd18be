from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, Header

from app.ai.factory import get_ai_client
from app.ai.types import AIClient
from app.career.errors import UpstreamFailure
from app.core.config import settings
from app.core.security import resolve_user_id
from app.storage.store import CareerStore

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_store() -> CareerStore:
    store = CareerStore(settings.career_db_path)
    store.init_schema()
    return store


@lru_cache(maxsize=1)
def _cached_ai_client() -> AIClient:
    return get_ai_client()


def get_completion_client() -> AIClient:
    try:
        return _cached_ai_client()
    except (RuntimeError, ValueError) as exc:
        logger.error("completion_client_unavailable: %s", exc)
        raise UpstreamFailure("AI provider is not configured.") from exc


def current_user_id(
    authorization: str | None = Header(default=None),
    store: CareerStore = Depends(get_store),
) -> str:
    return resolve_user_id(authorization, store)
