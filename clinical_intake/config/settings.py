"""Application configuration and settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "clinical-intake"
    intake_port: int = 8006
    environment: str = "development"

    # Session persistence ("memory" or "mongo")
    session_store: str = "memory"
    session_key: str = "clinical_intake_session"
    session_expiry_hours: int = 24

    # MongoDB Configuration
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "clinical_intake"
    mongodb_collection_sessions: str = "intake_sessions"

    # Clinical Settings
    default_language: str = "en"
    emergency_number: str = "1122"
    psychiatric_helpline: str = "1122 or 042-35761999"
    multi_point_threshold: int = 3

    # CORS
    cors_origins: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Global settings instance
settings = Settings()
