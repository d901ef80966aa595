"""powerlinkpy — Python client library for the Visonic PowerLink2 web interface.

Reads and sets the alarm status through the module's local web management
interface.

Usage:
    from powerlinkpy import AlarmStatus, PowerLinkClient

    async with aiohttp.ClientSession() as session:
        client = PowerLinkClient(session, "192.168.1.50", "user", "pass")
        status = await client.async_get_status()
        if status is AlarmStatus.DISARMED:
            await client.async_set_status(AlarmStatus.ARMED_AWAY)
"""

from .client import PowerLinkClient
from .const import AlarmStatus
from .exceptions import (
    PowerLinkAuthBlockedError,
    PowerLinkAuthError,
    PowerLinkConnectionError,
    PowerLinkError,
    PowerLinkSessionError,
    PowerLinkStatusError,
    PowerLinkUnsupportedStatusError,
)
from .models import PowerLinkConfig

__all__ = [
    "PowerLinkClient",
    "PowerLinkConfig",
    "AlarmStatus",
    "PowerLinkError",
    "PowerLinkAuthError",
    "PowerLinkAuthBlockedError",
    "PowerLinkConnectionError",
    "PowerLinkSessionError",
    "PowerLinkStatusError",
    "PowerLinkUnsupportedStatusError",
]

__version__ = "0.1.0"
