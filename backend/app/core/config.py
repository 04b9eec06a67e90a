from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./talenttrack.db"

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Admin accounts can only be self-registered with this key
    ADMIN_REGISTRATION_KEY: str = "talenttrack-admin-key-change-me"

    # Application
    APP_NAME: str = "TalentTrack"
    DEBUG: bool = True
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"
    SEED_DEMO_DATA: bool = False
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://localhost:5000,"
        "http://127.0.0.1:5173,"
        "http://127.0.0.1:5000"
    )

    # Dashboard / listing defaults
    NEW_CANDIDATE_WINDOW_DAYS: int = 30
    RECENT_JOBS_LIMIT: int = 5
    UPCOMING_INTERVIEWS_LIMIT: int = 10
    ACTIVITY_LIMIT: int = 10
    ADMIN_ACTIVITY_LIMIT: int = 100


settings = Settings()
