"""
Configuration management for the meal planner backend.

This module centralizes environment variable loading from the .env file at project root.
It should be imported early in the backend (api/main.py) to ensure .env is loaded before
any other code (e.g. groceries.db) accesses environment variables.

In production .env will not exist; load_dotenv() is safe to call and will no-op, and
platform environment variables are used instead.

Environment Variables:
- DATABASE_URL: Optional, enables SQLAlchemy persistence of grocery lists
- API_AUTH_TOKENS: Optional, comma-separated "token:user_id" pairs accepted as bearer tokens
- EVENT_LOG_FILE: Optional, path of the JSONL analytics log (default: events.log)
- CORS_ORIGINS: Optional, comma-separated list of allowed frontend origins
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take precedence
    over values in .env (override=False).
    """
    # api/config.py -> api/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


# Load .env file on module import
load_env_file()


class DatabaseConfig:
    """Configuration for grocery list persistence."""

    @staticmethod
    def get_database_url() -> Optional[str]:
        """
        Get the database URL.

        Returns:
            SQLAlchemy URL string or None (in-memory storage)
        """
        return os.getenv("DATABASE_URL")


class AuthConfig:
    """Configuration for bearer token authentication."""

    @staticmethod
    def get_token_users() -> Dict[str, str]:
        """
        Parse API_AUTH_TOKENS into a token -> user id mapping.

        Format: "token1:user1,token2:user2". Malformed pairs are ignored.

        Returns:
            Dictionary mapping bearer tokens to user ids (empty if not configured)
        """
        raw = os.getenv("API_AUTH_TOKENS", "")
        mapping: Dict[str, str] = {}
        for pair in raw.split(","):
            token, sep, user_id = pair.strip().partition(":")
            if sep and token.strip() and user_id.strip():
                mapping[token.strip()] = user_id.strip()
        return mapping


class CorsConfig:
    """Configuration for browser clients."""

    @staticmethod
    def get_origins() -> List[str]:
        """
        Get allowed CORS origins.

        Returns:
            List of origins (default: the local frontend dev server)
        """
        raw = os.getenv("CORS_ORIGINS", "http://localhost:5173")
        return [o.strip() for o in raw.split(",") if o.strip()]
