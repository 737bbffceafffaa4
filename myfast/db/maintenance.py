from loguru import logger

from myfast.db.database import Database
from myfast.db.schema import USER_TABLES
from myfast.db.seed import seed_defaults


def erase_all_data(db: Database) -> None:
    """Delete every user row and restore the seeded defaults.

    Protocols and the applied schema version are kept.
    """

    def _erase() -> None:
        for table in USER_TABLES:
            db.run(f"DELETE FROM {table}")
        seed_defaults(db)

    db.transaction(_erase)
    logger.info("data_erased tables={}", len(USER_TABLES))
