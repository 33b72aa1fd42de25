from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str

    secret_key: str
    access_token_algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080

    rate_limit_enabled: bool = True
    folders_rate_limit: str = "60/minute"
    # concurrent subtree counts per root-mode request; keep below the DB pool size
    folder_count_concurrency: int = 4
    log_level: str = "INFO"

    cors_origins: str = "http://localhost,http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
