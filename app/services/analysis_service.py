from __future__ import annotations

import logging
import sqlite3
import time
import uuid

from app.ai.types import AIClient
from app.analytics.db import log_analysis_run
from app.career.domain_resolver import profile_text, rank_scores, resolve_dominant_domain
from app.career.errors import CareerAnalysisError, InsufficientData, StoreFailure, UpstreamFailure
from app.career.narrative_parser import parse_narrative
from app.career.prompt import build_analysis_messages
from app.career.scoring import aggregate_scores
from app.schemas.career import AnalysisResult, Recommendation
from app.storage.store import CareerStore

logger = logging.getLogger(__name__)


def _log_run(
    *,
    run_id: str,
    user_id: str,
    model: str,
    status: str,
    started: float,
    error_code: str | None = None,
    dominant_domain: str | None = None,
    defaulted_fields: list[str] | None = None,
) -> None:
    try:
        log_analysis_run(
            run_id=run_id,
            user_id=user_id,
            model=model or "unknown",
            status=status,
            error_code=error_code,
            latency_ms=int((time.perf_counter() - started) * 1000),
            dominant_domain=dominant_domain,
            defaulted_fields=defaulted_fields,
        )
    except Exception:  # pragma: no cover - analytics must not break analysis
        logger.debug("analysis_run_logging_failed", exc_info=True)


async def _run_pipeline(
    user_id: str, *, store: CareerStore, ai_client: AIClient
) -> tuple[AnalysisResult, list[str]]:
    try:
        answers = store.get_answers_with_question_domain(user_id)
        profile = store.get_profile(user_id)
    except sqlite3.Error as exc:
        logger.exception("career_store_read_failed user_id=%s", user_id)
        raise StoreFailure() from exc

    if not answers:
        raise InsufficientData()

    scores = rank_scores(aggregate_scores(answers))
    domain = resolve_dominant_domain(scores, profile_text(profile))
    messages = build_analysis_messages(profile, scores)

    try:
        ai_analysis = await ai_client.complete(messages)
    except CareerAnalysisError:
        raise
    except Exception as exc:  # noqa: BLE001 - unknown client faults are upstream failures
        logger.exception("completion_unexpected_error")
        raise UpstreamFailure() from exc

    parsed = parse_narrative(ai_analysis, domain)
    recommendation = Recommendation(
        user_id=user_id,
        dominant_domain=domain,
        primary_career=parsed.primary_career,
        reasoning=ai_analysis,
        score_breakdown=scores,
        alternative_careers=parsed.alternative_careers,
        skill_gaps=parsed.skill_gaps,
        roadmap_steps=parsed.roadmap_steps,
        recommended_resources=parsed.resources,
    )

    try:
        store.replace_recommendation(recommendation)
    except sqlite3.Error as exc:
        logger.exception("career_store_write_failed user_id=%s", user_id)
        raise StoreFailure() from exc

    return AnalysisResult(recommendation=recommendation, ai_analysis=ai_analysis), parsed.defaulted_fields


async def analyze_career(user_id: str, *, store: CareerStore, ai_client: AIClient) -> AnalysisResult:
    """Score the user's answers, ask the model for guidance and save the parsed recommendation.

    The previous recommendation is replaced only once a new one is ready; any
    failure leaves it untouched and surfaces as a ``CareerAnalysisError``.
    """
    run_id = uuid.uuid4().hex
    started = time.perf_counter()
    model = getattr(ai_client, "model", "unknown")
    try:
        result, defaulted = await _run_pipeline(user_id, store=store, ai_client=ai_client)
    except CareerAnalysisError as exc:
        _log_run(run_id=run_id, user_id=user_id, model=model, status="error", started=started, error_code=exc.code)
        raise
    except Exception as exc:  # noqa: BLE001 - every failure is reported as a tagged error
        logger.exception("career_analysis_failed user_id=%s", user_id)
        _log_run(run_id=run_id, user_id=user_id, model=model, status="error", started=started, error_code="internal")
        raise CareerAnalysisError() from exc

    _log_run(
        run_id=run_id,
        user_id=user_id,
        model=model,
        status="success",
        started=started,
        dominant_domain=result.recommendation.dominant_domain,
        defaulted_fields=defaulted,
    )
    return result
