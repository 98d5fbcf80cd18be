from __future__ import annotations

from pathlib import Path
from typing import Sequence

from app.ai.types import ChatMessage
from app.schemas.career import AnswerSubmission
from app.storage.store import CareerStore

SAMPLE_NARRATIVE = """### Primary Career Recommendation: **Full-Stack Software Engineer**

Your strongest results are in the technical and analytical questions.

### Alternative Career Paths:

1. **Data Analyst** - You enjoy patterns and numbers.
2. **DevOps Engineer** - You like automating systems.
3. **Product Manager** - You can bridge tech and business.

### Skill Gaps to Address:

1. **System Design**: Study distributed architectures.
2. **Cloud Platforms**: Earn an AWS certification.

### Roadmap for Career Development:

**Step 1: Months 1-6 - Foundations**
Learn Python and JavaScript. Build three small projects.

**Step 2: Months 7-12 - First Experience**
Apply to internships and contribute to open source.

**Step 3: Year 2 - Specialization**
Pick backend or frontend and go deep.

### Recommended Resources:

* **CS50** - Harvard / edX
- **The Odin Project** - Free online curriculum
- **LeetCode** - Practice platform
"""


class FakeAIClient:
    model = "fake-model"

    def __init__(self, response: str = SAMPLE_NARRATIVE, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[list[ChatMessage]] = []

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.response


def seeded_store() -> CareerStore:
    store = CareerStore(":memory:")
    store.init_schema()
    store.seed_from_yaml(
        questions_path=_config_path("assessment_questions.yaml"),
        colleges_path=_config_path("colleges.yaml"),
    )
    return store


def answer_all(store: CareerStore, user_id: str, by_domain: dict[str, int], default: int = 3) -> None:
    answers = [
        AnswerSubmission(question_id=q.id, value=by_domain.get(q.domain, default))
        for q in store.list_questions()
    ]
    store.upsert_answers(user_id, answers)


def _config_path(name: str) -> str:
    return str(Path(__file__).resolve().parents[1] / "config" / name)
