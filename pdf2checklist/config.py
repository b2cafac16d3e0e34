"""Runtime configuration."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parser tunables, overridable through PDF2CHECKLIST_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="PDF2CHECKLIST_", extra="ignore")

    # Line reconstruction (page units, see points_per_unit)
    line_tolerance: float = Field(default=0.3, gt=0.0)
    points_per_unit: float = Field(default=16.0, gt=0.0)

    # Content-based fallback
    fallback_max_items: int = Field(default=50, ge=1)

    # QA
    qa_threshold: float = Field(default=0.80, ge=0.0, le=1.0)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None


settings = Settings()
