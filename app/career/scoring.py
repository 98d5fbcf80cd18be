from __future__ import annotations

from typing import Iterable

from app.core.config.scoring import get_scoring_value
from app.schemas.career import Answer, DomainScore


def aggregate_scores(answers: Iterable[Answer]) -> list[DomainScore]:
    """Average answers per domain tag, in first-seen order.

    Empty input yields an empty list; callers decide whether that is an error.
    """
    scale_max = float(get_scoring_value("scoring.scale_max", 5))
    totals: dict[str, list[int]] = {}
    for answer in answers:
        bucket = totals.setdefault(answer.domain, [0, 0])
        bucket[0] += answer.value
        bucket[1] += 1

    scores: list[DomainScore] = []
    for domain, (total, count) in totals.items():
        raw_average = total / count
        scores.append(
            DomainScore(
                domain=domain,
                raw_average=raw_average,
                normalized_score=raw_average / scale_max * 100,
            )
        )
    return scores
