"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from bp_tracker.domain.classification import Thresholds

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    timezone: str = "UTC"
    log_level: str = "INFO"
    elevated_systolic: float = 140
    elevated_diastolic: float = 90
    slightly_elevated_systolic: float = 120
    slightly_elevated_diastolic: float = 80
    lower_systolic: float = 90
    lower_diastolic: float = 60
    slightly_lower_systolic: float = 100
    slightly_lower_diastolic: float = 65
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def thresholds(self) -> Thresholds:
        """Return the classifier thresholds shared by every consumer."""
        return Thresholds(
            elevated_systolic=self.elevated_systolic,
            elevated_diastolic=self.elevated_diastolic,
            slightly_elevated_systolic=self.slightly_elevated_systolic,
            slightly_elevated_diastolic=self.slightly_elevated_diastolic,
            lower_systolic=self.lower_systolic,
            lower_diastolic=self.lower_diastolic,
            slightly_lower_systolic=self.slightly_lower_systolic,
            slightly_lower_diastolic=self.slightly_lower_diastolic,
        )
