from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config import settings  # noqa: E402
from app.storage.store import CareerStore  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a bearer token for a user of the career guidance API.")
    parser.add_argument("user_id", help="User id the token authenticates as")
    parser.add_argument("--db", default=settings.career_db_path, help="Career sqlite database path")
    parser.add_argument(
        "--ttl-days",
        type=int,
        default=settings.session_token_ttl_days,
        help="Days until the token expires",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Also seed assessment questions and colleges when the tables are empty.",
    )
    args = parser.parse_args()

    store = CareerStore(args.db)
    store.init_schema()
    if args.seed:
        store.seed_from_yaml(settings.questions_seed_path, settings.colleges_seed_path)
    token = store.create_session_token(args.user_id, ttl_days=args.ttl_days)
    store.close()
    print(token)


if __name__ == "__main__":
    main()
