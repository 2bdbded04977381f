from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]

PRODUCTION_LIKE_ENVS = frozenset({"production", "staging"})


class Settings(BaseSettings):
    app_name: str = "spotted-api"
    app_env: str = "development"
    app_port: int = 8000

    postgres_user: str = "spotted"
    postgres_password: str = "spotted"
    postgres_db: str = "spotted"
    postgres_host: str = "localhost"
    postgres_port: int = 5432

    product_token_secret: str | None = None
    product_token_max_age_days: int = 30
    product_token_future_skew_seconds: int = 300

    admin_password_hash: str | None = None
    admin_session_secret: str | None = None
    admin_session_ttl_hours: int = 24

    allow_legacy_deletion_requests: bool = False

    sendgrid_api_key: str | None = None
    sendgrid_base_url: str = "https://api.sendgrid.com"
    sendgrid_timeout_seconds: float = 10.0
    from_email: str | None = None
    public_base_url: str = "https://spottedgfc.pl"
    store_name: str = "Spotted GFC"
    store_contact_phone: str = ""
    store_description: str = ""

    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_recycle_seconds: int = 1800

    log_level: str = "INFO"

    cors_allow_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    model_config = SettingsConfigDict(
        env_file=(str(BASE_DIR / ".env"), ".env"),
        env_file_encoding="utf-8",
    )

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+psycopg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_production_like(self) -> bool:
        return self.app_env.strip().lower() in PRODUCTION_LIKE_ENVS

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


settings = Settings()
