"""
Application Settings

Loads store credentials and runtime options from environment variables.
"""

from functools import lru_cache
from typing import Dict

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # "memory" keeps everything in the Streamlit session, "supabase" uses the hosted store
    data_backend: str = "memory"

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_key: str = ""
    request_timeout: int = 10  # seconds, applied to store HTTP calls

    # In-memory backend login, email -> password
    demo_users: Dict[str, str] = {"admin@example.com": "admin"}
    load_sample_data: bool = True

    # App Configuration
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
