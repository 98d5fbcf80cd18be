from __future__ import annotations

import json
import os
import secrets
import sqlite3
import threading
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterable

import yaml

from app.schemas.career import (
    Answer,
    AnswerSubmission,
    AssessmentQuestion,
    College,
    DomainScore,
    Profile,
    Recommendation,
    RoadmapStep,
)

_PROFILE_FIELDS = tuple(Profile.model_fields)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS profiles (
        user_id TEXT PRIMARY KEY,
        full_name TEXT,
        main_skill TEXT,
        interest_area TEXT,
        goals TEXT,
        hobbies TEXT,
        daily_habits TEXT,
        marks_percentage REAL,
        location_city TEXT,
        location_state TEXT,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS assessment_questions (
        id TEXT PRIMARY KEY,
        text TEXT NOT NULL,
        domain TEXT NOT NULL,
        order_number INTEGER NOT NULL,
        question_type TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS assessment_answers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        question_id TEXT NOT NULL REFERENCES assessment_questions (id),
        answer_value INTEGER NOT NULL CHECK (answer_value BETWEEN 1 AND 5),
        created_at TEXT NOT NULL,
        UNIQUE (user_id, question_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS career_recommendations (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        dominant_domain TEXT NOT NULL,
        primary_career TEXT NOT NULL,
        reasoning TEXT,
        score_breakdown_json TEXT,
        alternative_careers_json TEXT,
        skill_gaps_json TEXT,
        roadmap_steps_json TEXT,
        recommended_resources_json TEXT,
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_career_recommendations_user
    ON career_recommendations (user_id)
    """,
    """
    CREATE TABLE IF NOT EXISTS colleges (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        city TEXT NOT NULL,
        state TEXT NOT NULL,
        domain TEXT NOT NULL,
        course TEXT NOT NULL,
        website TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS session_tokens (
        token TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        created_at TEXT NOT NULL,
        expires_at TEXT NOT NULL
    )
    """,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _loads(raw: str | None) -> list[Any]:
    if not raw:
        return []
    parsed = json.loads(raw)
    return parsed if isinstance(parsed, list) else []


def _load_yaml_list(path: str | Path, key: str) -> list[dict[str, Any]]:
    with Path(path).open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    items = raw.get(key, []) if isinstance(raw, dict) else []
    return [item for item in items if isinstance(item, dict)]


class CareerStore:
    """sqlite persistence for profiles, answers, recommendations and colleges."""

    def __init__(self, db_path: str):
        self._db_path = db_path
        self._lock = threading.Lock()
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        self._conn.row_factory = sqlite3.Row
        if db_path != ":memory:":
            self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._conn.execute("PRAGMA busy_timeout=5000;")
        self._conn.execute("PRAGMA foreign_keys=ON;")

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def init_schema(self) -> None:
        with self._lock:
            for statement in _SCHEMA:
                self._conn.execute(statement)

    def seed_from_yaml(self, questions_path: str | Path | None, colleges_path: str | Path | None) -> dict[str, int]:
        seeded = {"assessment_questions": 0, "colleges": 0}
        if questions_path and Path(questions_path).exists() and not self.list_questions():
            questions = [AssessmentQuestion(**item) for item in _load_yaml_list(questions_path, "questions")]
            with self._lock:
                self._conn.executemany(
                    """
                    INSERT INTO assessment_questions (id, text, domain, order_number, question_type)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [(q.id, q.text, q.domain, q.order_number, q.question_type) for q in questions],
                )
            seeded["assessment_questions"] = len(questions)
        if colleges_path and Path(colleges_path).exists() and not self.list_colleges():
            colleges = [College(**item) for item in _load_yaml_list(colleges_path, "colleges")]
            with self._lock:
                self._conn.executemany(
                    """
                    INSERT INTO colleges (id, name, city, state, domain, course, website)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [(c.id, c.name, c.city, c.state, c.domain, c.course, c.website) for c in colleges],
                )
            seeded["colleges"] = len(colleges)
        return seeded

    # Profiles

    def get_profile(self, user_id: str) -> Profile | None:
        with self._lock:
            row = self._conn.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,)).fetchone()
        if not row:
            return None
        return Profile(**{name: row[name] for name in _PROFILE_FIELDS})

    def upsert_profile(self, user_id: str, profile: Profile) -> Profile:
        values = profile.model_dump()
        columns = ", ".join(_PROFILE_FIELDS)
        placeholders = ", ".join("?" for _ in _PROFILE_FIELDS)
        updates = ", ".join(f"{name} = excluded.{name}" for name in _PROFILE_FIELDS)
        with self._lock:
            self._conn.execute(
                f"""
                INSERT INTO profiles (user_id, {columns}, updated_at)
                VALUES (?, {placeholders}, ?)
                ON CONFLICT (user_id) DO UPDATE SET {updates}, updated_at = excluded.updated_at
                """,
                (user_id, *(values[name] for name in _PROFILE_FIELDS), _utc_now().isoformat()),
            )
        return profile

    # Assessment

    def list_questions(self) -> list[AssessmentQuestion]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, text, domain, order_number, question_type FROM assessment_questions ORDER BY order_number"
            ).fetchall()
        return [AssessmentQuestion(**dict(row)) for row in rows]

    def upsert_answers(self, user_id: str, answers: Iterable[AnswerSubmission]) -> int:
        rows = [(user_id, a.question_id, a.value, _utc_now().isoformat()) for a in answers]
        with self._lock:
            self._conn.executemany(
                """
                INSERT INTO assessment_answers (user_id, question_id, answer_value, created_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT (user_id, question_id) DO UPDATE SET answer_value = excluded.answer_value
                """,
                rows,
            )
        return len(rows)

    def get_answers_with_question_domain(self, user_id: str) -> list[Answer]:
        with self._lock:
            rows = self._conn.execute(
                """
                SELECT a.question_id, q.domain, a.answer_value
                FROM assessment_answers a
                JOIN assessment_questions q ON q.id = a.question_id
                WHERE a.user_id = ?
                ORDER BY q.order_number
                """,
                (user_id,),
            ).fetchall()
        return [Answer(question_id=row[0], domain=row[1], value=row[2]) for row in rows]

    # Recommendations

    def _insert_recommendation_row(self, rec: Recommendation) -> None:
        self._conn.execute(
            """
            INSERT INTO career_recommendations (
                id, user_id, dominant_domain, primary_career, reasoning, score_breakdown_json,
                alternative_careers_json, skill_gaps_json, roadmap_steps_json,
                recommended_resources_json, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                uuid.uuid4().hex,
                rec.user_id,
                rec.dominant_domain,
                rec.primary_career,
                rec.reasoning,
                _dumps([score.model_dump() for score in rec.score_breakdown]),
                _dumps(rec.alternative_careers),
                _dumps(rec.skill_gaps),
                _dumps([step.model_dump() for step in rec.roadmap_steps]),
                _dumps(rec.recommended_resources),
                rec.created_at or _utc_now().isoformat(),
            ),
        )

    def delete_recommendation(self, user_id: str) -> int:
        with self._lock:
            cur = self._conn.execute("DELETE FROM career_recommendations WHERE user_id = ?", (user_id,))
        return cur.rowcount

    def insert_recommendation(self, rec: Recommendation) -> None:
        with self._lock:
            self._insert_recommendation_row(rec)

    def replace_recommendation(self, rec: Recommendation) -> None:
        """Delete every recommendation for the user and insert ``rec`` in one transaction."""
        with self._lock:
            self._conn.execute("BEGIN IMMEDIATE")
            try:
                self._conn.execute("DELETE FROM career_recommendations WHERE user_id = ?", (rec.user_id,))
                self._insert_recommendation_row(rec)
            except Exception:
                self._conn.execute("ROLLBACK")
                raise
            self._conn.execute("COMMIT")

    def count_recommendations(self, user_id: str) -> int:
        with self._lock:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM career_recommendations WHERE user_id = ?", (user_id,)
            ).fetchone()
        return int(row[0])

    def get_recommendation(self, user_id: str) -> Recommendation | None:
        with self._lock:
            row = self._conn.execute(
                """
                SELECT * FROM career_recommendations
                WHERE user_id = ?
                ORDER BY created_at DESC
                LIMIT 1
                """,
                (user_id,),
            ).fetchone()
        if not row:
            return None
        return Recommendation(
            user_id=row["user_id"],
            dominant_domain=row["dominant_domain"],
            primary_career=row["primary_career"],
            reasoning=row["reasoning"] or "",
            score_breakdown=[DomainScore(**item) for item in _loads(row["score_breakdown_json"])],
            alternative_careers=_loads(row["alternative_careers_json"]),
            skill_gaps=_loads(row["skill_gaps_json"]),
            roadmap_steps=[RoadmapStep(**item) for item in _loads(row["roadmap_steps_json"])],
            recommended_resources=_loads(row["recommended_resources_json"]),
            created_at=row["created_at"],
        )

    # Colleges

    def list_colleges(self) -> list[College]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT id, name, city, state, domain, course, website FROM colleges ORDER BY name"
            ).fetchall()
        return [College(**dict(row)) for row in rows]

    # Session tokens

    def create_session_token(self, user_id: str, ttl_days: int = 30) -> str:
        created_at = _utc_now()
        expires_at = created_at + timedelta(days=max(1, ttl_days))
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._conn.execute(
                "INSERT INTO session_tokens (token, user_id, created_at, expires_at) VALUES (?, ?, ?, ?)",
                (token, user_id, created_at.isoformat(), expires_at.isoformat()),
            )
        return token

    def get_user_id_for_token(self, token: str) -> str | None:
        if not token:
            return None
        with self._lock:
            row = self._conn.execute(
                "SELECT user_id, expires_at FROM session_tokens WHERE token = ?", (token,)
            ).fetchone()
        if not row:
            return None
        if datetime.fromisoformat(row["expires_at"]) <= _utc_now():
            return None
        return row["user_id"]
