# courseboard/core/config.py
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCOPES = [
    "https://www.googleapis.com/auth/classroom.courses.readonly",
    "https://www.googleapis.com/auth/classroom.rosters.readonly",
    "https://www.googleapis.com/auth/classroom.coursework.students",
    "https://www.googleapis.com/auth/classroom.coursework.me",
    "https://www.googleapis.com/auth/classroom.announcements.readonly",
    "https://www.googleapis.com/auth/classroom.profile.emails",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # OAuth client + stored refresh token (obtained out of band)
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_refresh_token: Optional[str] = None
    google_token_uri: str = "https://oauth2.googleapis.com/token"
    google_scopes: List[str] = DEFAULT_SCOPES

    # "me" = the authenticated user
    student_id: str = "me"
    default_lookahead_days: int = 7

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @field_validator("default_lookahead_days")
    @classmethod
    def non_negative_days(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"default_lookahead_days must be non-negative, got {v}")
        return v

    @property
    def has_credentials(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret and self.google_refresh_token)


settings = Settings()
