from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Sequence

from app.core.config.scoring import get_scoring_value
from app.schemas.career import CANONICAL_DOMAINS, DomainScore, Profile

logger = logging.getLogger(__name__)

# Scanned in this order; the first canonical domain with a hit wins.
PROFILE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Technology", ("programming", "coding", "tech", "software", "computer", "developer", "engineer")),
    ("Business", ("business", "entrepreneur", "management", "finance", "marketing", "sales", "startup")),
    ("Art", ("art", "design", "creative", "painting", "drawing", "visual", "graphic")),
    ("Music", ("music", "singing", "instrument", "composer", "producer", "audio")),
    ("Education", ("teaching", "education", "tutor", "trainer", "professor", "instructor")),
)

ASSESSMENT_DOMAIN_MAP: dict[str, str] = {
    "analytical": "Technology",
    "technical": "Technology",
    "technology": "Technology",
    "creativity": "Art",
    "artistic": "Art",
    "arts": "Art",
    "musical": "Music",
    "music": "Music",
    "business": "Business",
    "management": "Business",
    "leadership": "Business",
    "education": "Education",
    "teaching": "Education",
    "social": "Education",
}


def profile_text(profile: Profile | None) -> str:
    if profile is None:
        return ""
    parts = [profile.main_skill or "", profile.interest_area or "", profile.goals or ""]
    return " ".join(parts).lower()


def rank_scores(scores: Sequence[DomainScore]) -> list[DomainScore]:
    """Highest raw average first; near-ties fall back to domain name order."""
    tolerance = float(get_scoring_value("resolution.tie_tolerance", 0.1))

    def _compare(a: DomainScore, b: DomainScore) -> int:
        if abs(a.raw_average - b.raw_average) < tolerance:
            return (a.domain > b.domain) - (a.domain < b.domain)
        return -1 if a.raw_average > b.raw_average else 1

    by_name = sorted(scores, key=lambda item: item.domain)
    return sorted(by_name, key=cmp_to_key(_compare))


def match_profile_keywords(text: str) -> str | None:
    lowered = (text or "").lower()
    if not lowered.strip():
        return None
    for domain, keywords in PROFILE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return domain
    return None


def canonicalize_domain(domain: str) -> str:
    key = (domain or "").strip().lower()
    mapped = ASSESSMENT_DOMAIN_MAP.get(key)
    if mapped is not None:
        return mapped
    for canonical in CANONICAL_DOMAINS:
        if canonical.lower() == key:
            return canonical
    fallback = str(get_scoring_value("resolution.fallback_domain", "Technology"))
    logger.warning("unknown_assessment_domain domain=%s fallback=%s", domain, fallback)
    return fallback


def resolve_dominant_domain(scores: Sequence[DomainScore], text: str) -> str:
    ranked = rank_scores(scores)
    if not ranked:
        raise ValueError("resolve_dominant_domain requires at least one domain score")

    dominant = ranked[0].domain
    override = match_profile_keywords(text)
    if override is not None:
        logger.info("dominant_domain_override from=%s to=%s", dominant, override)
        dominant = override

    return canonicalize_domain(dominant)
