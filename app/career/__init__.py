from .colleges import match_colleges
from .default_roadmaps import DEFAULT_ROADMAPS, default_roadmap
from .domain_resolver import (
    ASSESSMENT_DOMAIN_MAP,
    PROFILE_KEYWORDS,
    canonicalize_domain,
    match_profile_keywords,
    profile_text,
    rank_scores,
    resolve_dominant_domain,
)
from .narrative_parser import parse_narrative
from .prompt import build_analysis_messages, build_career_prompt
from .scoring import aggregate_scores

__all__ = [
    "aggregate_scores",
    "rank_scores",
    "profile_text",
    "match_profile_keywords",
    "canonicalize_domain",
    "resolve_dominant_domain",
    "PROFILE_KEYWORDS",
    "ASSESSMENT_DOMAIN_MAP",
    "build_career_prompt",
    "build_analysis_messages",
    "parse_narrative",
    "DEFAULT_ROADMAPS",
    "default_roadmap",
    "match_colleges",
]
