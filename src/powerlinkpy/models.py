"""Data models for the powerlinkpy library."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .const import DEFAULT_TIMEOUT, URL_SCHEME, AlarmStatus


@dataclass(frozen=True)
class PowerLinkConfig:
    """Connection settings for a PowerLink2 module."""

    host: str
    username: str
    password: str = field(repr=False)
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host is required")
        if not self.username or not self.password:
            raise ValueError("username and password are required")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @property
    def base_url(self) -> str:
        """Root URL of the module's web interface."""
        return f"{URL_SCHEME}://{self.host}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PowerLinkConfig:
        """Create from a plain config mapping.

        Missing optional keys fall back to the defaults; ``timeout`` is in
        seconds.
        """
        return cls(
            host=data.get("host", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            timeout=float(data.get("timeout") or DEFAULT_TIMEOUT),
            debug=bool(data.get("debug", False)),
        )


@dataclass
class PanelResponse:
    """Reply to an authenticated panel request."""

    status: int
    body: str


@dataclass
class StatusUpdate:
    """Parsed reply from the status endpoint."""

    no_change: bool
    index: str | None = None
    raw_status: str | None = None
    status: AlarmStatus | None = None
