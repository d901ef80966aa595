"""Login and cookie handling for the PowerLink2 web interface."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from .const import LOGIN_PATH, USER_AGENT
from .exceptions import (
    PowerLinkAuthBlockedError,
    PowerLinkAuthError,
    PowerLinkConnectionError,
)
from .models import PowerLinkConfig
from .parser import extract_cookie, parse_login_rejection

_LOGGER = logging.getLogger(__name__)


class PowerLinkSession:
    """Owns the session cookie of one client.

    Logins are serialized: however many requests need a cookie at once, only
    one login request is in flight. Once the panel rejects the credentials
    the session stays blocked, so repeated bad logins cannot extend a lockout.
    Create a new client to try again.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        config: PowerLinkConfig,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._session = session
        self._config = config
        self._logger = logger or _LOGGER
        self._login_url = f"{config.base_url}{LOGIN_PATH}"

        self._cookie: str | None = None
        self._blocked = False
        self._login_lock = asyncio.Lock()

    @property
    def cookie(self) -> str | None:
        """Currently cached session cookie."""
        return self._cookie

    @property
    def is_authenticated(self) -> bool:
        """Return True if a session cookie is cached."""
        return self._cookie is not None

    @property
    def is_blocked(self) -> bool:
        """Return True if a rejected login has disabled further attempts."""
        return self._blocked

    def invalidate(self, cookie: str | None = None) -> None:
        """Forget the cached cookie.

        Args:
            cookie: The cookie found to be stale. If another caller has already
                replaced it with a fresh one, the fresh cookie is kept.
        """
        if cookie is None or cookie == self._cookie:
            self._cookie = None

    async def async_ensure_cookie(self) -> str:
        """Return the cached cookie, logging in first if there is none.

        Raises:
            PowerLinkAuthBlockedError: If an earlier login was rejected.
            PowerLinkAuthError: If the panel rejects the credentials.
            PowerLinkConnectionError: If the panel cannot be reached.
        """
        async with self._login_lock:
            if self._blocked:
                raise PowerLinkAuthBlockedError(
                    "A previous authentication attempt failed; not continuing"
                )
            if self._cookie is not None:
                return self._cookie
            self._cookie = await self._login()
            return self._cookie

    async def _login(self) -> str:
        """Post the credentials and return the issued cookie."""
        data = {
            "user": self._config.username,
            "pass": self._config.password,
        }
        headers = {"User-Agent": USER_AGENT}
        timeout = aiohttp.ClientTimeout(total=self._config.timeout)

        try:
            async with self._session.post(
                self._login_url, data=data, headers=headers, timeout=timeout
            ) as resp:
                body = await resp.text(errors="replace")
                resp.raise_for_status()
                set_cookies = resp.headers.getall("Set-Cookie", [])
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise PowerLinkConnectionError(
                f"Connection error during login: {err!r}"
            ) from err

        if self._config.debug:
            self._logger.debug("Login response body: %s", body)

        rejection = parse_login_rejection(body)
        if rejection is not None:
            reason, lockout = rejection
            self._blocked = True
            self._logger.error(reason)
            raise PowerLinkAuthError(reason, lockout=lockout)

        cookie = extract_cookie(set_cookies)
        if cookie is None:
            raise PowerLinkAuthError("Login response did not set a session cookie")

        if self._config.debug:
            self._logger.debug("Got authentication cookie: %s", cookie)
        return cookie
