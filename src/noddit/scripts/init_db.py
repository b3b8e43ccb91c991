# src/noddit/scripts/init_db.py
"""Create every table directly from the ORM metadata.

Handy for throwaway SQLite databases; real deployments run Alembic via
``noddit.scripts.migrate``.
"""
import logging

from noddit.core.logging import configure_logging
from noddit.db.session import create_tables, engine

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Initialize the database by creating all tables."""
    create_tables()
    logger.info("Database initialized at %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    configure_logging()
    init_db()
