import logging

from alembic.config import Config

from alembic import command

logger = logging.getLogger(__name__)


def run_migrations(db_url: str, config_path: str = "alembic.ini", revision: str = "head") -> None:
    """Upgrade the ``pages`` and ``page_orders`` schema to ``revision``."""
    alembic_cfg = Config(config_path)
    alembic_cfg.set_main_option("sqlalchemy.url", db_url)
    logger.info("Upgrading page schema to %s", revision)
    command.upgrade(alembic_cfg, revision)
