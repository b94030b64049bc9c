# (c) Copyright Datacraft, 2026
"""Application settings configuration."""
from pathlib import Path

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	db_url: str = "sqlite+aiosqlite:///./iamkit.db"
	db_ssl: bool = False
	log_config: Path | None = None
	api_prefix: str = ''

	# Tokens
	jwt_secret: str = Field(default="change-me-in-production")
	jwt_algorithm: str = "HS256"
	access_token_expire_minutes: int = Field(gt=0, default=60)
	assumed_role_token_expire_minutes: int = Field(gt=0, default=15)

	@computed_field
	@property
	def async_db_url(self) -> str:
		url = self.db_url
		if "postgresql+psycopg://" in url:
			return url.replace("postgresql+psycopg://", "postgresql+asyncpg://", 1)
		elif "postgresql://" in url:
			return url.replace("postgresql://", "postgresql+asyncpg://", 1)
		return url

	model_config = SettingsConfigDict(
		env_prefix='iam_',
		env_file='.env',
		env_file_encoding='utf-8',
		extra='ignore',
	)


_settings: Settings | None = None


def get_settings() -> Settings:
	global _settings
	if _settings is None:
		_settings = Settings()
	return _settings
