"""Client configuration management."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000/api/v1"
MEMORY_STORAGE = "memory"


class ClientConfig(BaseModel):
    """Configuration for the credibility client."""

    api_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the scorer backend")
    timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds; None waits until the backend answers",
    )
    history_dir: str = Field(
        default=str(Path.home() / ".credibility_client"),
        description=f"Directory holding persisted history, or '{MEMORY_STORAGE}'",
    )
    history_limit: int = Field(default=50, description="Maximum number of history entries")
    scenario_cache_ttl: int = Field(default=300, description="Test scenario cache TTL in seconds")

    @property
    def persist_history(self) -> bool:
        return self.history_dir != MEMORY_STORAGE

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create configuration from environment variables (and a .env file if present)."""
        load_dotenv()

        timeout = os.getenv("CREDIBILITY_API_TIMEOUT")
        config = cls(
            api_url=os.getenv("CREDIBILITY_API_URL", DEFAULT_API_URL),
            timeout=float(timeout) if timeout else None,
            history_dir=os.getenv(
                "CREDIBILITY_HISTORY_DIR", str(Path.home() / ".credibility_client")
            ),
            history_limit=int(os.getenv("CREDIBILITY_HISTORY_LIMIT", "50")),
            scenario_cache_ttl=int(os.getenv("CREDIBILITY_SCENARIO_CACHE_TTL", "300")),
        )

        logger.info(f"🔧 Scorer backend: {config.api_url}")
        if config.persist_history:
            logger.info(f"💾 History directory: {config.history_dir}")
        else:
            logger.warning("⚠️ History persistence disabled - history is kept in memory only")

        return config
