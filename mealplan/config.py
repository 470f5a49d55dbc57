from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List
from dotenv import load_dotenv
load_dotenv()  # populates os.environ from .env


class Settings(BaseSettings):
    # Storage
    data_dir: str = Field("data", description="DATA_DIR")
    recipes_file: str = Field("data/recipes.json", description="RECIPES_FILE")
    events_file: str = Field("data/suggestion_log.jsonl", description="EVENTS_FILE")

    # Suggestions
    default_suggestion_count: int = Field(3, ge=0)
    max_suggestion_count: int = Field(20, ge=1)

    # CORS
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://127.0.0.1:3000"])

    # Logging / tracing
    log_level: str = "INFO"
    tracing_enabled: bool = False
    otlp_endpoint: str = "http://127.0.0.1:6006/v1/traces"
    service_name: str = "mealplan-suggest-api"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")
