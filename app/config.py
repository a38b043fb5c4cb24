from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # Database settings
    APP_DB_HOST: str = "localhost"
    APP_DB_PORT: int = 5432
    APP_DB_USER: str = "sdof"
    APP_DB_PASSWORD: str = "sdofmysecretpassword"
    APP_DB_NAME: str = "sdof"

    # Redis settings
    APP_REDIS_HOST: str = "localhost"
    APP_REDIS_PORT: int = 6379

    # External email validation service
    APP_EXTERNAL_URL: str = "https://superservice.com/api"
    VALIDATOR_TIMEOUT_S: float = 10.0

    # =================================================================
    # DATABASE POOL SETTINGS
    # =================================================================
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 10
    DB_POOL_TIMEOUT: float = 30.0

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def db_conninfo(self) -> str:
        """Build a libpq connection string from the APP_DB_* settings."""
        return (
            f"host={self.APP_DB_HOST} port={self.APP_DB_PORT} "
            f"dbname={self.APP_DB_NAME} user={self.APP_DB_USER} "
            f"password={self.APP_DB_PASSWORD}"
        )

    def redis_url(self) -> str:
        return f"redis://{self.APP_REDIS_HOST}:{self.APP_REDIS_PORT}/0"

    def validator_base_url(self) -> str:
        return self.APP_EXTERNAL_URL.rstrip("/")

    def get_db_pool_config(self) -> dict:
        """
        Get database pool configuration.
        Adjust environment-specific settings based on self.environment.
        """
        config = {
            "min_size": self.DB_POOL_MIN_SIZE,
            "max_size": self.DB_POOL_MAX_SIZE,
            "timeout": self.DB_POOL_TIMEOUT,
        }

        if self.environment == "development":
            # Local containers start slowly, but we do not want to wait forever
            config["timeout"] = min(config["timeout"], 15.0)

        return config


settings = Settings()
