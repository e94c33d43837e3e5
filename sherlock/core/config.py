# Standard library imports
import os
from typing import Final, Optional


class Settings:
    """
    Application settings loaded from environment variables.

    This class centralizes all configuration settings for the application.
    All settings are loaded from environment variables with sensible defaults.
    """

    def __init__(self) -> None:
        # Database Configuration
        self.mongo_uri: Final[str] = os.getenv("MONGO_URI", "mongodb://localhost:27017")
        self.mongo_database_name: Final[str] = os.getenv("MONGO_DB_NAME", "sherlock")
        self.store_timeout_seconds: Final[float] = float(
            os.getenv("STORE_TIMEOUT_SECONDS", "5.0")
        )

        # Identity matching
        self.match_threshold: Final[float] = float(os.getenv("MATCH_THRESHOLD", "0.7"))
        self.embedding_dimension: Final[int] = int(os.getenv("EMBEDDING_DIMENSION", "1024"))
        self.embedding_model: Final[str] = os.getenv("EMBEDDING_MODEL", "ArcFace")

        # Observation pipeline
        self.processing_interval_seconds: Final[float] = float(
            os.getenv("PROCESSING_INTERVAL_SECONDS", "2.0")
        )
        self.notify_interval_seconds: Final[float] = float(
            os.getenv("NOTIFY_INTERVAL_SECONDS", "30")
        )

        # Headshot capture and media storage
        self.headshot_padding_ratio: Final[float] = float(
            os.getenv("HEADSHOT_PADDING_RATIO", "0.2")
        )
        self.headshot_jpeg_quality: Final[int] = int(os.getenv("HEADSHOT_JPEG_QUALITY", "90"))
        self.headshot_bucket: Final[str] = os.getenv("HEADSHOT_BUCKET", "headshots")
        self.public_media_base_url: Final[str] = os.getenv(
            "PUBLIC_MEDIA_BASE_URL",
            "http://localhost:8000/api/v1/media/headshots"
        )

        # Bulk import
        self.import_download_timeout_seconds: Final[float] = float(
            os.getenv("IMPORT_DOWNLOAD_TIMEOUT_SECONDS", "30")
        )

        # Voice agent
        self.voice_agent_model: Final[str] = os.getenv("VOICE_AGENT_MODEL", "gemini-2.0-flash")

        self.local_timezone: Final[str] = os.getenv("LOCAL_TIMEZONE", "UTC")


# Global settings instance (singleton pattern)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings (singleton pattern)

    Returns:
        Settings instance with all configuration values
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
