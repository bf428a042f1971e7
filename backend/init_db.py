from database import engine, Base
import logging

import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


def init_database():
    """Create all tables that do not exist yet"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
