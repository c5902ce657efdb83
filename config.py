"""Configuration for the exposition parser"""
import codecs
from pathlib import Path
from typing import Literal, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Settings with Pydantic validation, read from environment variables"""

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    # Service settings
    service_name: str = Field(default="exposition-parser", description="Service name bound into log events")

    # Parsing diagnostics
    error_context_chars: int = Field(default=40, ge=1, description="Characters of unparsed input shown in failure logs")

    # File wrappers
    prometheus_file: Optional[Path] = Field(default=None, description="Default exposition file to read or write")
    file_encoding: str = Field(default="utf-8", description="Encoding used for exposition files")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names from the environment"""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('log_file')
    @classmethod
    def ensure_parent_directories(cls, v):
        """Ensure parent directories exist for file paths"""
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @field_validator('file_encoding')
    @classmethod
    def validate_encoding(cls, v):
        """Reject encodings Python does not know"""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown file encoding: {v}")
        return v
