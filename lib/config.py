"""Environment-driven server configuration."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_LLM_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 60.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Runtime settings for the HintTutor server."""

    llm_api_url: str = DEFAULT_LLM_API_URL
    llm_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    llm_timeout: float = DEFAULT_TIMEOUT
    llm_mock: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and a .env file if present)."""
        load_dotenv()

        settings = cls(
            llm_api_url=os.getenv("LLM_API_URL") or DEFAULT_LLM_API_URL,
            llm_api_key=os.getenv("LLM_API_KEY") or None,
            model=os.getenv("MODEL") or DEFAULT_MODEL,
            host=os.getenv("HOST") or "0.0.0.0",
            port=int(os.getenv("PORT") or DEFAULT_PORT),
            llm_timeout=float(os.getenv("LLM_TIMEOUT") or DEFAULT_TIMEOUT),
            llm_mock=(os.getenv("LLM_MOCK") or "").strip().lower() in _TRUTHY,
        )

        if not settings.llm_api_key and not settings.llm_mock:
            logger.warning("LLM_API_KEY is not set. Set it in .env or the environment.")

        return settings
