from __future__ import annotations

from typing import Sequence

from app.schemas.career import College


def match_colleges(
    colleges: Sequence[College],
    domain: str,
    state: str | None = None,
    *,
    limit: int = 10,
) -> list[College]:
    """Colleges for a domain; falls back to the user's state, then to the first ``limit`` entries."""
    wanted = (domain or "").strip().lower()
    by_domain = [college for college in colleges if college.domain.lower() == wanted]
    if by_domain:
        return by_domain

    state_key = (state or "").strip().lower()
    if state_key:
        in_state = [college for college in colleges if college.state.lower() == state_key]
        if in_state:
            return in_state[:limit]

    return list(colleges[:limit])
