"""
Configuration management for the application.
Loads settings from environment variables and the project .env file.
"""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from loguru import logger

# This file is at bizassist/config/settings.py, so project root is 3 levels up
_project_root = Path(__file__).resolve().parent.parent.parent

PROJECT_ROOT = _project_root

_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(dotenv_path=_env_file, override=True)
    logger.debug(f"Loaded .env from: {_env_file}")
else:
    logger.debug(f".env file not found at: {_env_file}, using process environment")
    load_dotenv(override=False)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_project_root / ".env"),
        env_file_encoding="utf-8",
        extra="allow",
    )

    # LLM Provider Selection
    llm_provider: str = Field(default="openai")  # Options: "openai" | "ollama"
    hosted_model_enabled: bool = Field(default=True)  # False forces the rule-based path

    # API Keys
    openai_api_key: str = Field(default="")

    # OpenAI Configuration
    openai_model: str = Field(default="gpt-4o")
    openai_temperature: float = Field(default=0.2)

    # Ollama Configuration
    ollama_base_url: str = Field(default="http://localhost:11434")
    ollama_model: str = Field(default="llama3")

    # Hosted call limits; the fallback only helps if these stay small
    llm_timeout_seconds: float = Field(default=15.0)
    llm_max_retries: int = Field(default=1)
    max_output_tokens: int = Field(default=500)

    # Pipeline Configuration
    context_window_messages: int = Field(default=5)  # Prior messages sent to the hosted model
    intent_score_threshold: float = Field(default=0.1)  # Below this the classifier answers general_inquiry
    restock_incoming_units: int = Field(default=15)
    system_name: str = Field(default="BusinessAI Assistant")
    currency_symbol: str = Field(default="$")

    # Storage Configuration
    storage_backend: str = Field(default="memory")  # Options: "memory" | "sql"
    database_url: str = Field(default="sqlite:///data/bizassist.db")
    seed_sample_data: bool = Field(default=True)

    # Logging
    log_level: str = Field(default="INFO")
    log_dir: str = Field(default="data/logs")

    # API Server
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    cors_origins: List[str] = Field(default=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"])

    def resolved_database_url(self) -> str:
        """Resolve relative SQLite paths against the project root."""
        prefix = "sqlite:///"
        if self.database_url.startswith(prefix) and not self.database_url.startswith(prefix + "/"):
            relative = self.database_url[len(prefix):]
            if relative and relative != ":memory:":
                db_path = _project_root / relative
                db_path.parent.mkdir(parents=True, exist_ok=True)
                return f"{prefix}{db_path}"
        return self.database_url

    def resolved_log_dir(self) -> Path:
        log_dir = Path(self.log_dir)
        if not log_dir.is_absolute():
            log_dir = _project_root / log_dir
        return log_dir


# Create global settings instance
settings = Settings()
