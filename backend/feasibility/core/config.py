from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised engine configuration with type validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Optional[Path] = Field(default=None)

    # Knowledge base
    knowledge_base_dir: Path = Field(default=Path("context"))
    knowledge_base_suffix: str = Field(default=".md")
    document_read_timeout: float = Field(default=30.0, gt=0.0, le=600.0)

    # Search caps
    tool_search_limit: int = Field(default=20, ge=1, le=100)
    requirement_search_limit: int = Field(default=5, ge=1, le=100)
    max_recommendations: int = Field(default=10, ge=1, le=100)

    # Ecosystem maturity priors
    well_established_documents: Dict[str, int] = Field(
        default_factory=lambda: {"context_engineering_iq": 85}
    )
    user_document_prefix: str = Field(default="context_user_", min_length=1)
    user_document_maturity: int = Field(default=60, ge=0, le=100)
    default_document_maturity: int = Field(default=70, ge=0, le=100)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """Cached singleton so the .env file is only read once."""
    return Settings()
