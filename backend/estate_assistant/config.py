"""
Configuration settings for the Broker Assistant application.
"""

import logging
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Keys
    OPENAI_API_KEY: str = ""

    # OpenAI Model Settings
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_TEMPERATURE: float = 0.3
    OPENAI_MAX_TOKENS: int = 1000

    # Routing
    USE_LLM_ROUTER: bool = True  # False uses the keyword router (no API key needed)
    CLASSIFIER_HISTORY_WINDOW: int = 6

    # Session / cache settings
    HISTORY_LIMIT: int = 10
    CACHE_TTL_SECONDS: float = 300.0
    CACHE_MAX_ENTRIES: int = 128
    SESSION_TIMEOUT_HOURS: int = 24

    # Mock data settings
    MOCK_LISTING_COUNT: int = 5
    MOCK_SEED: Optional[int] = None

    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent
    SYSTEM_PROMPTS_DIR: Path = BASE_DIR / "prompts"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience function to load prompt files
def load_system_prompt(agent_name: str) -> str:
    """
    Load a system prompt from the prompts directory.

    Args:
        agent_name: Name of the agent (e.g., 'router_agent')

    Returns:
        The prompt text content
    """
    settings = get_settings()
    prompt_file = settings.SYSTEM_PROMPTS_DIR / f"{agent_name}_prompt.txt"

    if prompt_file.exists():
        return prompt_file.read_text(encoding="utf-8")
    else:
        logger.warning(f"System prompt for {agent_name} not found at {prompt_file}")
        return f"[PLACEHOLDER] System prompt for {agent_name} not found at {prompt_file}"
