"""
Script to initialize the database tables.
"""
import logging

from learnsense.db.base import engine
from learnsense.models import Base

logger = logging.getLogger(__name__)


def init() -> None:
    """Create all tables that do not exist yet."""
    logger.info(f"Creating database tables on {engine.url.render_as_string(hide_password=True)}")
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database tables ready: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(levelname)s:\t%(name)s\t%(message)s')
    init()
