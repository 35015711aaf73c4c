"""Load the starter skill, assessment and resource catalog."""

from __future__ import annotations

import logging
import sys

from skillsense.catalog_seed import seed_catalog
from skillsense.db.session import session_scope
from skillsense.logging_config import configure_logging

LOGGER = logging.getLogger("skillsense.seed")


def main() -> int:
    configure_logging()
    try:
        with session_scope() as session:
            created = seed_catalog(session)
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Catalog seeding failed: %s", exc)
        return 1
    LOGGER.info("Created %s", created)
    return 0


if __name__ == "__main__":
    sys.exit(main())
