"""PowerLink2 local web interface client."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from .const import (
    COMMAND_PATH,
    DEFAULT_TIMEOUT,
    MAX_RELOGIN_RETRIES,
    RELOGIN_DELAY,
    SESSION_USER_MANAGER,
    STATUS_INDEX_SENTINEL,
    STATUS_PATH,
    STATUS_TO_COMMAND,
    USER_AGENT,
    AlarmStatus,
)
from .exceptions import (
    PowerLinkConnectionError,
    PowerLinkSessionError,
    PowerLinkStatusError,
    PowerLinkUnsupportedStatusError,
)
from .models import PanelResponse, PowerLinkConfig
from .parser import is_session_expired, parse_status_response
from .session import PowerLinkSession

_LOGGER = logging.getLogger(__name__)


class PowerLinkClient:
    """Async client for a Visonic PowerLink2 module.

    Usage:
        async with aiohttp.ClientSession() as session:
            client = PowerLinkClient(session, "192.168.1.50", "user", "pass")
            status = await client.async_get_status()
            await client.async_set_status(AlarmStatus.ARMED_HOME)
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        host: str,
        username: str,
        password: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
        logger: logging.Logger | None = None,
        relogin_delay: float = RELOGIN_DELAY,
        max_relogin_retries: int = MAX_RELOGIN_RETRIES,
    ) -> None:
        """Initialize the client.

        Args:
            session: aiohttp client session (caller manages lifecycle).
            host: Hostname or IP address of the PowerLink2 module.
            username: Web interface username.
            password: Web interface password.
            timeout: Per-request timeout in seconds.
            debug: Log raw panel responses.
            logger: Logger to use instead of the module logger.
            relogin_delay: Seconds to wait before retrying with a new cookie.
            max_relogin_retries: Retries allowed when the panel drops the session.
        """
        self._config = PowerLinkConfig(
            host=host,
            username=username,
            password=password,
            timeout=timeout,
            debug=debug,
        )
        self._session = session
        self._logger = logger or _LOGGER
        self._relogin_delay = relogin_delay
        self._max_relogin_retries = max_relogin_retries

        self._auth = PowerLinkSession(session, self._config, logger=self._logger)

        self._status_index: str | None = None
        self._last_status: AlarmStatus | None = None

    @classmethod
    def from_config(
        cls,
        session: aiohttp.ClientSession,
        config: PowerLinkConfig,
        *,
        logger: logging.Logger | None = None,
        relogin_delay: float = RELOGIN_DELAY,
        max_relogin_retries: int = MAX_RELOGIN_RETRIES,
    ) -> PowerLinkClient:
        """Create a client from a PowerLinkConfig."""
        return cls(
            session,
            config.host,
            config.username,
            config.password,
            timeout=config.timeout,
            debug=config.debug,
            logger=logger,
            relogin_delay=relogin_delay,
            max_relogin_retries=max_relogin_retries,
        )

    # ── Public properties ────────────────────────────────────────────

    @property
    def config(self) -> PowerLinkConfig:
        """Connection settings."""
        return self._config

    @property
    def is_blocked(self) -> bool:
        """Return True if a rejected login has disabled this client."""
        return self._auth.is_blocked

    @property
    def last_status(self) -> AlarmStatus | None:
        """Status from the most recent successful read."""
        return self._last_status

    @property
    def status_index(self) -> str | None:
        """Status cursor returned by the panel on the last read."""
        return self._status_index

    # ── HTTP helpers ─────────────────────────────────────────────────

    async def _authenticated_request(
        self,
        path: str,
        data: dict[str, str],
        *,
        timeout: float | None = None,
    ) -> PanelResponse:
        """POST a form with the session cookie, logging in again if it expired."""
        url = f"{self._config.base_url}{path}"
        client_timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else self._config.timeout
        )
        retries = 0

        while True:
            cookie = await self._auth.async_ensure_cookie()
            headers = {"Cookie": cookie, "User-Agent": USER_AGENT}

            try:
                async with self._session.post(
                    url, data=data, headers=headers, timeout=client_timeout
                ) as resp:
                    body = await resp.text(errors="replace")
                    resp.raise_for_status()
                    status = resp.status
            except (aiohttp.ClientError, asyncio.TimeoutError) as err:
                raise PowerLinkConnectionError(
                    f"Connection error: POST {path}: {err!r}"
                ) from err

            if not is_session_expired(body):
                return PanelResponse(status=status, body=body)

            self._auth.invalidate(cookie)
            if retries >= self._max_relogin_retries:
                raise PowerLinkSessionError(
                    f"Panel rejected the session for {path} after "
                    f"{retries} re-login attempt(s)"
                )
            retries += 1
            self._logger.debug(
                "Session cookie no longer valid, retrying %s in %.1fs",
                path,
                self._relogin_delay,
            )
            await asyncio.sleep(self._relogin_delay)

    # ── Status ───────────────────────────────────────────────────────

    async def async_get_status(self) -> AlarmStatus:
        """Get the current alarm status.

        Returns:
            The current AlarmStatus. If the panel reports no change since the
            last read, the previous status is returned.

        Raises:
            PowerLinkStatusError: If the status could not be fetched or parsed.
            PowerLinkAuthError: If the login was rejected (or blocked).
            PowerLinkSessionError: If the panel kept dropping the session after
                re-login.
        """
        data = {
            "curindex": self._status_index or STATUS_INDEX_SENTINEL,
            "sesusername": self._config.username,
            "sesusermanager": SESSION_USER_MANAGER,
        }
        try:
            response = await self._authenticated_request(STATUS_PATH, data)
        except PowerLinkConnectionError as err:
            raise PowerLinkStatusError(f"Error getting raw status: {err}") from err

        if self._config.debug:
            self._logger.debug("Status response body: %s", response.body)

        update = parse_status_response(response.body)
        if update.no_change:
            self._logger.debug("Status hasn't changed, returning last status")
            return self._last_status or AlarmStatus.UNKNOWN

        if update.index is not None:
            self._status_index = update.index
            self._logger.debug("Status index: %s", update.index)

        status = update.status or AlarmStatus.UNKNOWN
        if status is AlarmStatus.UNKNOWN:
            self._logger.warning("Unrecognized panel status: %r", update.raw_status)
        self._last_status = status
        return status

    # ── Arm / Disarm ─────────────────────────────────────────────────

    async def async_set_status(self, status: AlarmStatus | str) -> None:
        """Arm or disarm the system.

        Args:
            status: DISARMED, ARMED_HOME or ARMED_AWAY.

        Raises:
            PowerLinkUnsupportedStatusError: For EXIT_DELAY, UNKNOWN or any
                other value the panel cannot be set to.
            PowerLinkConnectionError: If the command could not be sent.
            PowerLinkAuthError: If the login was rejected (or blocked).
            PowerLinkSessionError: If the panel kept dropping the session after
                re-login.
        """
        command = STATUS_TO_COMMAND.get(status)  # type: ignore[call-overload]
        if command is None:
            raise PowerLinkUnsupportedStatusError(f"Cannot set status to: {status}")

        response = await self._authenticated_request(COMMAND_PATH, {"set": command})

        # The reply does not say whether the command was accepted
        if self._config.debug:
            self._logger.debug("Set status response body: %s", response.body)

    async def async_disarm(self) -> None:
        """Disarm the system."""
        await self.async_set_status(AlarmStatus.DISARMED)

    async def async_arm_home(self) -> None:
        """Arm the system in Home mode."""
        await self.async_set_status(AlarmStatus.ARMED_HOME)

    async def async_arm_away(self) -> None:
        """Arm the system in Away mode."""
        await self.async_set_status(AlarmStatus.ARMED_AWAY)
