from __future__ import annotations

from typing import Sequence

from app.ai.types import ChatMessage
from app.schemas.career import DomainScore, Profile

SYSTEM_PROMPT = (
    "You are an expert career counselor. "
    "Provide detailed, actionable career guidance in a structured format."
)

# NarrativeParser relies on these headings and the "**Step N:" markers.
PRIMARY_HEADING = "### Primary Career Recommendation:"
ALTERNATIVES_HEADING = "### Alternative Career Paths:"
SKILL_GAPS_HEADING = "### Skill Gaps to Address:"
ROADMAP_HEADING = "### Roadmap for Career Development:"
RESOURCES_HEADING = "### Recommended Resources:"

_ROADMAP_PHASES: tuple[tuple[str, str, str, tuple[str, ...]], ...] = (
    (
        "Months 1-6",
        "Foundation Phase Name",
        "Provide 5-7 specific action items with clear deliverables. Include:",
        (
            "Exact courses or certifications to pursue",
            "Specific skills to develop with practice hours",
            "Projects to complete with detailed descriptions",
            "Communities or networks to join",
            "Expected outcomes and milestones",
        ),
    ),
    (
        "Months 7-12",
        "Growth Phase Name",
        "Provide 5-7 specific action items focusing on practical application. Include:",
        (
            "Internship or entry-level job targets",
            "Portfolio pieces to create with specifications",
            "Industry events or conferences to attend",
            "Mentor relationships to establish",
            "Measurable skill improvements",
        ),
    ),
    (
        "Year 2",
        "Specialization Phase Name",
        "Provide 5-7 specific action items for deepening expertise. Include:",
        (
            "Advanced certifications or specialized training",
            "Complex projects with industry relevance",
            "Leadership opportunities to pursue",
            "Professional contributions (articles, talks, workshops)",
            "Career milestone targets",
        ),
    ),
    (
        "Year 3-4",
        "Professional Advancement Phase Name",
        "Provide 5-7 specific action items for career growth. Include:",
        (
            "Target job roles and companies",
            "Industry recognition goals (awards, publications)",
            "Mentorship and teaching opportunities",
            "Personal brand development strategies",
            "Income and responsibility milestones",
        ),
    ),
    (
        "Year 5+",
        "Mastery & Leadership Phase Name",
        "Provide 5-7 specific action items for senior career development. Include:",
        (
            "Leadership position targets",
            "Industry influence strategies",
            "Business or venture opportunities",
            "Legacy building activities",
            "Long-term career vision milestones",
        ),
    ),
)


def _field(value: object) -> str:
    if value is None:
        return "N/A"
    text = str(value).strip()
    return text or "N/A"


def _marks(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:g}%"


def _numbered(template: str, count: int = 5) -> str:
    return "\n".join(f"{i}. {template.format(i=i)}" for i in range(1, count + 1))


def _bulleted(template: str, count: int = 5) -> str:
    return "\n".join(f"- {template.format(i=i)}" for i in range(1, count + 1))


def _roadmap_block() -> str:
    blocks: list[str] = []
    for number, (period, phase, lead, items) in enumerate(_ROADMAP_PHASES, start=1):
        bullets = "\n".join(f"- {item}" for item in items)
        blocks.append(f"**Step {number}: [{period}] - [{phase}]**\n{lead}\n{bullets}")
    return "\n\n".join(blocks)


def build_career_prompt(profile: Profile | None, ranked_scores: Sequence[DomainScore]) -> str:
    profile = profile or Profile()
    score_lines = "\n".join(f"- {s.domain}: {s.normalized_score:.1f}" for s in ranked_scores)

    return f"""You are an expert career counselor. Analyze this assessment and provide HIGHLY SPECIFIC career guidance.

Profile Information:
- Name: {_field(profile.full_name)}
- Main Skill: {_field(profile.main_skill)}
- Interest Area: {_field(profile.interest_area)}
- Goals: {_field(profile.goals)}
- Hobbies: {_field(profile.hobbies)}
- Daily Habits: {_field(profile.daily_habits)}
- Academic Performance: {_marks(profile.marks_percentage)}

Assessment Domain Scores (0-100 scale):
{score_lines}

CRITICAL: Even if scores are similar, you MUST identify ONE dominant strength based on:
1. The highest scoring domain
2. The user's stated interests and goals
3. Create clear differentiation in your analysis

Provide your response in this EXACT format:

{PRIMARY_HEADING} **[Specific Job Title]**

[2-3 paragraphs explaining this specific career and why it fits]

{ALTERNATIVES_HEADING}

{_numbered("**[Job Title {i}]** - [One sentence why this fits]")}

{SKILL_GAPS_HEADING}

{_numbered("**[Skill {i}]**: [How to develop it]")}

{ROADMAP_HEADING}

{_roadmap_block()}

{RESOURCES_HEADING}

{_bulleted("**[Resource {i}]** - [Platform/Provider]")}

IMPORTANT: Be specific, actionable, and create clear distinctions even when scores are similar."""


def build_analysis_messages(profile: Profile | None, ranked_scores: Sequence[DomainScore]) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_career_prompt(profile, ranked_scores)),
    ]
