from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'Dash Rates API'
	HOST: str = 'https://rates.dash-retail.com'
	BIND_ADDRESS: str = '0.0.0.0'
	PORT: int = 8000
	DEBUG: bool = False

	# Failure notifications, disabled when empty
	DISCORD_WEBHOOK_URL: str = ''
	NOTIFIER_USERNAME: str = 'Dash Rates API'

	# Cache, in process when REDIS_URL is empty
	REDIS_URL: str = ''
	CACHE_TTL_SECONDS: int = 60

	HTTP_TIMEOUT: float = 10.0

	LOG_LEVEL: str = 'INFO'
	LOG_DIRECTORY: str = ''

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
