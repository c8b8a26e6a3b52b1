"""Configuration loader from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from .endpoints import BASE_URL

DEFAULT_TOKEN_PATH = Path("data") / "session.json"
DEFAULT_RETURN_URL = "http://localhost:3000"


@dataclass
class Config:
    """Storefront configuration from .env file."""

    api_url: str = BASE_URL
    token_path: Path = DEFAULT_TOKEN_PATH
    return_url: str = DEFAULT_RETURN_URL
    http2: bool = True

    @classmethod
    def load(cls, env_path: Optional[Path] = None) -> Config:
        """Load config from .env file."""
        load_dotenv(env_path or ".env")

        return cls(
            api_url=os.getenv("STORE_API_URL", BASE_URL).rstrip("/"),
            token_path=Path(os.getenv("STORE_TOKEN_PATH", str(DEFAULT_TOKEN_PATH))),
            return_url=os.getenv("STORE_RETURN_URL", DEFAULT_RETURN_URL),
            http2=os.getenv("STORE_HTTP2", "1").lower() not in ("0", "false", "no"),
        )
