from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # External services
    llm_relay_url: str = "http://localhost:3000/api/call-openai"
    ingredient_image_base_url: str = "http://localhost:3000/ingredients"
    ingredient_alias_path: Optional[str] = None  # JSON file merged into the slug alias map

    # Network timeouts (seconds)
    fetch_timeout_seconds: float = 15.0
    connect_timeout_seconds: float = 5.0
    llm_timeout_seconds: float = 30.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    )

    # Pipeline behaviour
    recipe_gate_enabled: bool = True

    # Observability
    log_level: str = "INFO"
    logfire_token: Optional[str] = None

    # Server Configuration
    port: int = 8000
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow LLM_RELAY_URL or llm_relay_url
        extra="ignore"
    )


# Singleton instance
_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the settings singleton"""
    global _settings_instance

    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
