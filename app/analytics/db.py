from __future__ import annotations

import hashlib
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from app.core.config import settings

_SQLITE_TS = "%Y-%m-%d %H:%M:%S"


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime(_SQLITE_TS)


def _get_db_path() -> Path:
    return Path(settings.analytics_db_path)


def hash_user_id(user_id: str | None) -> str:
    normalized = (user_id or "").strip()
    if not normalized:
        return ""
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]


def init_db() -> None:
    if not settings.analytics_enabled:
        return
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS analysis_runs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                created_at TEXT NOT NULL,
                run_id TEXT NOT NULL,
                user_hash TEXT NOT NULL,
                model TEXT NOT NULL,
                status TEXT NOT NULL,
                error_code TEXT,
                latency_ms INTEGER,
                dominant_domain TEXT,
                defaulted_fields TEXT
            )
            """
        )
        conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_analysis_runs_created_at
            ON analysis_runs (created_at)
            """
        )
        conn.commit()
    purge_old_records()


def log_analysis_run(
    *,
    run_id: str,
    user_id: str,
    model: str,
    status: str,
    error_code: str | None = None,
    latency_ms: int | None = None,
    dominant_domain: str | None = None,
    defaulted_fields: list[str] | None = None,
) -> None:
    if not settings.analytics_enabled:
        return
    db_path = _get_db_path()
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO analysis_runs (
                created_at, run_id, user_hash, model, status, error_code, latency_ms,
                dominant_domain, defaulted_fields
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                _utc_now(),
                run_id,
                hash_user_id(user_id),
                model,
                status,
                error_code,
                latency_ms,
                dominant_domain,
                ",".join(defaulted_fields or []),
            ),
        )
        conn.commit()


def purge_old_records() -> dict[str, int]:
    if not settings.analytics_enabled:
        return {"analysis_runs": 0}

    db_path = _get_db_path()
    retention = max(1, int(settings.analytics_retention_days))
    with sqlite3.connect(db_path) as conn:
        cur = conn.execute(
            "DELETE FROM analysis_runs WHERE created_at < datetime('now', ?)",
            (f"-{retention} days",),
        )
        deleted = int(cur.rowcount or 0)
        conn.commit()

    return {"analysis_runs": deleted}


def get_summary() -> dict[str, Any]:
    if not settings.analytics_enabled:
        return {"enabled": False}
    db_path = _get_db_path()
    with sqlite3.connect(db_path) as conn:
        total = conn.execute("SELECT COUNT(*) FROM analysis_runs").fetchone()[0]
        total_7d = conn.execute(
            """
            SELECT COUNT(*)
            FROM analysis_runs
            WHERE created_at >= datetime('now', '-7 days')
            """
        ).fetchone()[0]
        by_status = dict(
            conn.execute("SELECT status, COUNT(*) FROM analysis_runs GROUP BY status").fetchall()
        )
        by_domain = dict(
            conn.execute(
                """
                SELECT dominant_domain, COUNT(*)
                FROM analysis_runs
                WHERE dominant_domain IS NOT NULL
                GROUP BY dominant_domain
                """
            ).fetchall()
        )
    return {
        "enabled": True,
        "total": total,
        "total_7d": total_7d,
        "by_status": by_status,
        "by_domain": by_domain,
    }
