# (c) Copyright Datacraft, 2026
"""Programmatic access to the alembic migrations shipped with the package."""
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


def alembic_config(url: str | None = None) -> Config:
	"""Config for the bundled scripts; `url` overrides the configured database."""
	config = Config()
	config.set_main_option("script_location", str(ALEMBIC_DIR))
	if url is not None:
		# configparser interpolation
		config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
	return config


def upgrade(url: str | None = None, revision: str = "head") -> None:
	logger.info(f"Upgrading database schema to {revision}")
	command.upgrade(alembic_config(url), revision)


def downgrade(url: str | None = None, revision: str = "base") -> None:
	logger.info(f"Downgrading database schema to {revision}")
	command.downgrade(alembic_config(url), revision)
