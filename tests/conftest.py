import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Keep tests deterministic: no analytics writes, no rate limiting, no real provider.
os.environ.setdefault("ANALYTICS_ENABLED", "0")
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")
os.environ.setdefault("CAREER_DB_PATH", ":memory:")
os.environ.setdefault("SENTRY_DSN", "")
os.environ.setdefault("AI_PROVIDER", "openai")
