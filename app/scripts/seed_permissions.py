"""
Insert missing entries of the fixed permission catalog into the permisos table.
Idempotent. Run from project root:
  python -m app.scripts.seed_permissions
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import create_db_engine, create_session_factory
from app.services.permissions import seed_permission_catalog

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    engine = create_db_engine(get_settings())
    db = create_session_factory(engine)()
    try:
        added = seed_permission_catalog(db)
        logger.info("Permission catalog seeded: added=%s", added)
        return 0
    except Exception as e:
        logger.exception("Seeding permissions failed: %s", e)
        return 1
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
