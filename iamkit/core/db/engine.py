# (c) Copyright Datacraft, 2026
import logging
import ssl

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from iamkit.core.config import get_settings

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_engine() -> AsyncEngine:
	global _engine
	if _engine is None:
		settings = get_settings()
		connect_args = {}
		if settings.db_ssl:
			# asyncpg requires an SSL context, not sslmode
			ssl_context = ssl.create_default_context()
			ssl_context.check_hostname = False
			ssl_context.verify_mode = ssl.CERT_NONE
			connect_args["ssl"] = ssl_context

		_engine = create_async_engine(
			settings.async_db_url,
			poolclass=NullPool,
			connect_args=connect_args,
		)
		logger.debug(f"Database engine created for {_engine.url.render_as_string(hide_password=True)}")
	return _engine


def get_session_factory() -> async_sessionmaker:
	global _session_factory
	if _session_factory is None:
		_session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
	return _session_factory


async def get_db():
	async with get_session_factory()() as session:
		yield session
