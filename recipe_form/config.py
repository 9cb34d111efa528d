from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional, List
from dotenv import load_dotenv
load_dotenv()  # populates os.environ from .env


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Recipe backend
    recipe_api_base_url: str = Field("http://localhost:8000", description="Root URL of the recipe backend")
    # None leaves the request unbounded, like a browser fetch
    recipe_api_timeout: Optional[float] = Field(None, gt=0, description="Seconds before a backend call is abandoned")

    # Rendering
    sanitize_recipe_html: bool = Field(True, description="Run backend recipe markup through the allowlist sanitizer")

    # Sessions
    session_cookie_name: str = Field("recipe_form_session")
    max_sessions: int = Field(1000, ge=1, description="Form states kept in memory; least recently used are dropped")

    # Logging
    log_level: str = Field("info")
    log_format: str = Field("%(asctime)s %(levelname)s %(name)s: %(message)s")

    # CORS
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://127.0.0.1:8001"])
