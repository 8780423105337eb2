from pydantic_settings import BaseSettings, SettingsConfigDict



class Settings(BaseSettings):
    APP_ENV: str = "dev"
    PORT: int = 8085
    LOG_LEVEL: str = "INFO"
    DATABASE_URL: str
    DB_ECHO: bool = False
    DB_AUTO_CREATE: bool = False
    CATALOG_SERVICE_URL: str = "http://localhost:8082"
    CATALOG_TIMEOUT_SECONDS: float = 10.0
    AWS_ACCESS_KEY: str | None = None
    AWS_SECRET_KEY: str | None = None
    AWS_REGION: str | None = None
    S3_BUCKET: str | None = None
    EVIDENCE_UPLOAD_PREFIX: str = "payment-evidence"
    EVIDENCE_URL_EXPIRES_IN: int = 3600
    INVITATION_TTL_DAYS: int = 7
    DEFAULT_CURRENCY: str = "EUR"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


Config = Settings()
