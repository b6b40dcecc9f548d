from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./linkshort.db"
    DB_TIMEOUT: int = 30  # seconds

    # Public base for short URLs; empty means "use the request's base URL"
    BASE_URL: str = ""

    # Rate Limiting
    RATE_LIMIT_CREATE: str = "10/minute"
    RATE_LIMIT_ENABLED: bool = True

    # Short codes
    SHORT_CODE_LENGTH: int = 6
    CODE_MIN_LENGTH: int = 3
    CODE_MAX_LENGTH: int = 32
    CODE_GENERATION_ATTEMPTS: int = 5

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
