"""Best-effort extraction of structured fields from a model's career narrative.

The model is asked for a fixed markdown layout (see ``app.career.prompt``) but
nothing guarantees it complies. Each field is extracted on its own; a field
that cannot be found takes its configured default and is listed in
``ParsedNarrative.defaulted_fields``. ``parse_narrative`` never raises.

Sections are located by their heading line (``### Skill Gaps ...``). A bare
line starting with the heading words is accepted only when no markdown
heading matches, so a passing mention in a paragraph is never read as a
section.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from app.career.default_roadmaps import default_roadmap
from app.core.config.scoring import get_scoring_value
from app.schemas.career import ParsedNarrative, RoadmapStep

logger = logging.getLogger(__name__)

_SECTION_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE
_SECTION_BODY = r"[^\n]*(?:\n|\Z)(.*?)(?=^[ \t]*#|\Z)"


def _section_patterns(heading: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    marked = re.compile(rf"^[ \t]*#{{1,6}}[ \t]*(?:\*\*)?[ \t]*{heading}{_SECTION_BODY}", _SECTION_FLAGS)
    plain = re.compile(rf"^[ \t]*(?:\*\*)?[ \t]*{heading}{_SECTION_BODY}", _SECTION_FLAGS)
    return marked, plain


_PRIMARY_RE = re.compile(r"Primary Career Recommendation:\s*\*\*(.+?)\*\*", re.IGNORECASE)
_ALTERNATIVES_SECTION = _section_patterns(r"Alternative Career Paths?")
_SKILL_GAPS_SECTION = _section_patterns(r"Skill Gaps?")
_ROADMAP_SECTION = _section_patterns(r"Roadmap for Career Development")
_RESOURCES_SECTION = _section_patterns(r"Recommended Resources")

_NUMBERED_BOLD_RE = re.compile(r"\d+\.\s*\*\*(.+?)\*\*")
_STEP_BLOCK_RE = re.compile(r"\*\*Step \d+:(.+?)\*\*(.+?)(?=\*\*Step|\n\n###|\Z)", re.IGNORECASE | re.DOTALL)
_STEP_TITLE_RE = re.compile(r"\*\*Step \d+:\s*(.+?)\*\*", re.IGNORECASE | re.DOTALL)
_BULLET_BOLD_RE = re.compile(r"^\s*[-*•]\s*\*\*(.+?)\*\*", re.MULTILINE)

_DEFAULT_LIMITS: dict[str, int] = {
    "alternative_careers": 5,
    "skill_gaps": 5,
    "roadmap_steps": 6,
    "resources": 10,
    "step_description_chars": 300,
}
_DEFAULT_PRIMARY = "AI-Generated Career Path"
_DEFAULT_ALTERNATIVES = ["Explore related fields", "Consider interdisciplinary roles", "Look into emerging careers"]
_DEFAULT_SKILL_GAPS = ["Technical proficiency", "Industry knowledge", "Practical experience"]


@dataclass(frozen=True)
class ParserSettings:
    limits: dict[str, int] = field(default_factory=lambda: dict(_DEFAULT_LIMITS))
    primary_career: str = _DEFAULT_PRIMARY
    alternative_careers: list[str] = field(default_factory=lambda: list(_DEFAULT_ALTERNATIVES))
    skill_gaps: list[str] = field(default_factory=lambda: list(_DEFAULT_SKILL_GAPS))


def _as_str_list(value: Any, fallback: list[str]) -> list[str]:
    if not isinstance(value, list) or not value:
        return list(fallback)
    return [str(item) for item in value]


def load_parser_settings() -> ParserSettings:
    """Limits and default lists from ``config/scoring.yaml``; built-in values when it cannot be read."""
    try:
        limits_cfg = get_scoring_value("parser.limits", {})
        defaults_cfg = get_scoring_value("parser.defaults", {})
    except RuntimeError as exc:
        logger.warning("parser_config_unavailable: %s", exc)
        return ParserSettings()

    limits_cfg = limits_cfg if isinstance(limits_cfg, dict) else {}
    defaults_cfg = defaults_cfg if isinstance(defaults_cfg, dict) else {}

    limits: dict[str, int] = {}
    for name, fallback in _DEFAULT_LIMITS.items():
        try:
            limits[name] = max(1, int(limits_cfg.get(name, fallback)))
        except (TypeError, ValueError):
            limits[name] = fallback

    primary = str(defaults_cfg.get("primary_career") or _DEFAULT_PRIMARY)
    return ParserSettings(
        limits=limits,
        primary_career=primary,
        alternative_careers=_as_str_list(defaults_cfg.get("alternative_careers"), _DEFAULT_ALTERNATIVES),
        skill_gaps=_as_str_list(defaults_cfg.get("skill_gaps"), _DEFAULT_SKILL_GAPS),
    )


def _clean(value: str) -> str:
    return value.replace("**", "").strip()


def _section(text: str, patterns: tuple[re.Pattern[str], re.Pattern[str]]) -> str | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def extract_primary_career(text: str) -> str | None:
    match = _PRIMARY_RE.search(text)
    if not match:
        return None
    title = _clean(match.group(1))
    return title or None


def extract_alternative_careers(text: str, limit: int = 5) -> list[str]:
    section = _section(text, _ALTERNATIVES_SECTION)
    if not section:
        return []
    titles = [_clean(item) for item in _NUMBERED_BOLD_RE.findall(section)]
    return [title for title in titles if title][:limit]


def extract_skill_gaps(text: str, limit: int = 5) -> list[str]:
    section = _section(text, _SKILL_GAPS_SECTION)
    if not section:
        return []
    skills: list[str] = []
    for item in _NUMBERED_BOLD_RE.findall(section):
        skill = _clean(item).split(":")[0].strip()
        if skill:
            skills.append(skill)
    return skills[:limit]


def extract_roadmap_steps(text: str, limit: int = 6, max_chars: int = 300) -> list[RoadmapStep]:
    section = _section(text, _ROADMAP_SECTION)
    if not section:
        return []

    steps: list[RoadmapStep] = []
    blocks = [match.group(0) for match in _STEP_BLOCK_RE.finditer(section)]
    for index, block in enumerate(blocks[:limit], start=1):
        title_match = _STEP_TITLE_RE.search(block)
        title = title_match.group(1).strip() if title_match else ""
        description = _STEP_TITLE_RE.sub("", block, count=1).strip()[:max_chars]
        steps.append(RoadmapStep(step=index, title=title or f"Step {index}", description=description))
    return steps


def extract_resources(text: str, limit: int = 10) -> list[str]:
    section = _section(text, _RESOURCES_SECTION)
    if not section:
        return []
    names = [_clean(item) for item in _BULLET_BOLD_RE.findall(section)]
    return [name for name in names if name][:limit]


def _guarded(field_name: str, extractor: Callable[[str], Any], text: str) -> Any:
    try:
        return extractor(text)
    except Exception as exc:  # noqa: BLE001 - a broken field must not abort the others
        logger.warning("narrative_parse_failed field=%s: %s", field_name, exc)
        return None


def parse_narrative(text: Any, domain: str, config: ParserSettings | None = None) -> ParsedNarrative:
    """Extract career fields from free text, falling back field by field."""
    raw = text if isinstance(text, str) else ""
    cfg = config or load_parser_settings()
    limits = cfg.limits
    defaulted: list[str] = []

    primary = _guarded("primary_career", extract_primary_career, raw)
    if not primary:
        primary = cfg.primary_career
        defaulted.append("primary_career")

    alternatives = _guarded(
        "alternative_careers",
        lambda t: extract_alternative_careers(t, limits["alternative_careers"]),
        raw,
    )
    if not alternatives:
        alternatives = list(cfg.alternative_careers)
        defaulted.append("alternative_careers")

    skill_gaps = _guarded("skill_gaps", lambda t: extract_skill_gaps(t, limits["skill_gaps"]), raw)
    if not skill_gaps:
        skill_gaps = list(cfg.skill_gaps)
        defaulted.append("skill_gaps")

    roadmap = _guarded(
        "roadmap_steps",
        lambda t: extract_roadmap_steps(t, limits["roadmap_steps"], limits["step_description_chars"]),
        raw,
    )
    if not roadmap:
        roadmap = default_roadmap(domain)
        defaulted.append("roadmap_steps")

    resources = _guarded("resources", lambda t: extract_resources(t, limits["resources"]), raw)
    if not resources:
        resources = []
        defaulted.append("resources")

    if defaulted:
        logger.info("narrative_parse_defaults domain=%s fields=%s", domain, ",".join(defaulted))

    return ParsedNarrative(
        primary_career=primary,
        alternative_careers=alternatives,
        skill_gaps=skill_gaps,
        roadmap_steps=roadmap,
        resources=resources,
        defaulted_fields=defaulted,
    )
