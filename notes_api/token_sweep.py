"""
CLI entrypoint for the refresh token retention job. Run from cron, e.g.:

  python -m notes_api.token_sweep

Or daily: 0 3 * * * cd /path/to/notes-api && .venv/bin/python -m notes_api.token_sweep
"""

import logging
import sys

from notes_api.core.config import get_settings
from notes_api.core.database import SessionLocal
from notes_api.services.token_sweep import run_token_sweep

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run the sweep: delete refresh tokens expired beyond TOKEN_RETENTION_HOURS."""
    settings = get_settings()
    db = SessionLocal()
    try:
        deleted = run_token_sweep(db, settings)
        logger.info("Token sweep completed: refresh_tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Token sweep failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
