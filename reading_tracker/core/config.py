from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://reading:reading@db:5432/reading"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://fellowship.example.org,https://admin.fellowship.example.org"
    CORS_ORIGINS: str = "*"

    # Daily reading card
    DAILY_VERSE_COUNT: int = 3
    VERSE_POOL_LIMIT: int = 500

    # Upper bounds for every store call so a request never hangs on the DB.
    DB_CONNECT_TIMEOUT_S: int = 10
    DB_STATEMENT_TIMEOUT_MS: int = 15_000

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_postgres(self) -> bool:
        return self.DATABASE_URL.startswith(("postgresql", "postgres"))


settings = Settings()
