"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from project root
# config.py is at: backend/topicqa/core/config.py
# Project root is: backend/topicqa/core/../../../
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
_project_root = _backend_dir.parent
ENV_FILE = _project_root / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "TopicQA"
    app_env: str = Field(default="development", description="Application environment")
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("api_port", "port"),
        description="API port",
    )
    allowed_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # Reference data
    data_file_path: str = Field(
        default="data/arepas_de_reina_pepiada.spanish.txt",
        description="Reference text file; its name must look like {topic}.{language}.txt"
    )

    # LLM
    ollama_url: str = Field(default="http://localhost:11434", description="Ollama API URL")
    llm_model: str = Field(default="deepseek-r1:8b", description="Model used for both validation and answers")
    llm_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Upstream LLM timeout in seconds (unset = wait indefinitely)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"topicqa.services": "DEBUG"})'
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/topicqa.log",
        description="Path to log file (relative to project root)"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of days to keep log files"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case level names"""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v.lower()

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
