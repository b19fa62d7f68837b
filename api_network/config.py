"""Configuration helpers for the API client."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

DEFAULT_BASE_URL = "https://baseURL"


@dataclass(slots=True)
class ClientConfig:
    """Client configuration, optionally read from environment variables.

    ``timeout`` of ``None`` keeps the transport's default timeout.
    """

    base_url: str = DEFAULT_BASE_URL
    access_token: Optional[str] = None
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create a :class:`ClientConfig` using environment variables."""

        raw_timeout = os.getenv("API_TIMEOUT", "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else None
        except ValueError as exc:
            raise ValueError(f"API_TIMEOUT must be a number, got {raw_timeout!r}") from exc

        return cls(
            base_url=os.getenv("API_BASE_URL", DEFAULT_BASE_URL),
            access_token=os.getenv("API_ACCESS_TOKEN") or None,
            timeout=timeout,
        )


__all__ = ["ClientConfig", "DEFAULT_BASE_URL"]
