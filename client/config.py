"""
Configuration for the API client.

Loads .env from the project root on import (existing environment variables win),
then reads:
- API_URL: Backend base URL (default: http://localhost:8888)
- API_TIMEOUT_MS: Per-request timeout in milliseconds (default: 30000)
- API_ACCESS_TOKEN: Optional bearer token for StaticSessionProvider
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8888"
DEFAULT_TIMEOUT_MS = 30000

# client/config.py -> client/ -> project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=False)


class ClientConfig:
    @staticmethod
    def get_api_url() -> str:
        """Backend base URL with any trailing slash removed."""
        return os.getenv("API_URL", DEFAULT_API_URL).rstrip("/")

    @staticmethod
    def get_timeout_ms() -> int:
        """Request timeout in milliseconds; invalid values fall back to the default."""
        raw = os.getenv("API_TIMEOUT_MS")
        if not raw:
            return DEFAULT_TIMEOUT_MS
        try:
            value = int(raw)
        except ValueError:
            logger.warning("Invalid API_TIMEOUT_MS %r, using %d", raw, DEFAULT_TIMEOUT_MS)
            return DEFAULT_TIMEOUT_MS
        return value if value > 0 else DEFAULT_TIMEOUT_MS

    @staticmethod
    def get_access_token() -> Optional[str]:
        return os.getenv("API_ACCESS_TOKEN") or None
