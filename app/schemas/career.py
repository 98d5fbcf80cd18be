from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

CANONICAL_DOMAINS: tuple[str, ...] = ("Technology", "Business", "Art", "Music", "Education")


class Answer(BaseModel):
    question_id: str
    domain: str
    value: int = Field(ge=1, le=5)


class DomainScore(BaseModel):
    domain: str
    raw_average: float = Field(ge=1.0, le=5.0)
    normalized_score: float = Field(ge=0.0, le=100.0)


class Profile(BaseModel):
    full_name: str | None = None
    main_skill: str | None = None
    interest_area: str | None = None
    goals: str | None = None
    hobbies: str | None = None
    daily_habits: str | None = None
    marks_percentage: float | None = Field(default=None, ge=0.0, le=100.0)
    location_city: str | None = None
    location_state: str | None = None


class RoadmapStep(BaseModel):
    model_config = {"frozen": True}

    step: int = Field(ge=1)
    title: str
    description: str


class ParsedNarrative(BaseModel):
    primary_career: str
    alternative_careers: list[str] = Field(default_factory=list)
    skill_gaps: list[str] = Field(default_factory=list)
    roadmap_steps: list[RoadmapStep] = Field(default_factory=list)
    resources: list[str] = Field(default_factory=list)
    defaulted_fields: list[str] = Field(default_factory=list)


class Recommendation(BaseModel):
    user_id: str
    dominant_domain: str
    primary_career: str
    reasoning: str = ""
    score_breakdown: list[DomainScore] = Field(default_factory=list)
    alternative_careers: list[str] = Field(default_factory=list, max_length=5)
    skill_gaps: list[str] = Field(default_factory=list, max_length=5)
    roadmap_steps: list[RoadmapStep] = Field(default_factory=list, max_length=6)
    recommended_resources: list[str] = Field(default_factory=list, max_length=10)
    created_at: str | None = None

    @field_validator("dominant_domain")
    @classmethod
    def _validate_dominant_domain(cls, value: str) -> str:
        if value not in CANONICAL_DOMAINS:
            raise ValueError(f"dominant_domain must be one of: {', '.join(CANONICAL_DOMAINS)}")
        return value

    @field_validator("score_breakdown")
    @classmethod
    def _validate_unique_domains(cls, value: list[DomainScore]) -> list[DomainScore]:
        labels = [item.domain for item in value]
        if len(labels) != len(set(labels)):
            raise ValueError("score_breakdown domains must be unique")
        return value

    @model_validator(mode="after")
    def _validate_contiguous_steps(self) -> "Recommendation":
        numbers = [item.step for item in self.roadmap_steps]
        if numbers and numbers != list(range(1, len(numbers) + 1)):
            raise ValueError("roadmap_steps must be numbered 1..n without gaps")
        return self


class AnalysisResult(BaseModel):
    success: bool = True
    recommendation: Recommendation
    ai_analysis: str


class AssessmentQuestion(BaseModel):
    id: str
    text: str
    domain: str
    order_number: int
    question_type: str | None = "likert"


class AnswerSubmission(BaseModel):
    question_id: str = Field(min_length=1)
    value: int = Field(ge=1, le=5)


class AnswersRequest(BaseModel):
    answers: list[AnswerSubmission] = Field(min_length=1)


class College(BaseModel):
    id: str
    name: str
    city: str
    state: str
    domain: str
    course: str
    website: str | None = None


class CollegeMatchResponse(BaseModel):
    domain: str
    location_city: str = ""
    location_state: str = ""
    colleges: list[College] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    code: str
