"""Parsers for the loosely structured replies of the PowerLink2 web interface.

The module answers with XML-ish fragments rather than a documented schema.
All pattern matching lives here so the client only deals with typed results.

Status reply (abridged)::

    <reply><reply_type>ChkStatus</reply_type><index>17</index>
    <update><system><status>Ready</status><customStatus></customStatus>
    </system></update></reply>

A status reply with nothing new carries
``<customStatus>[NOCNG]</customStatus>`` instead of a snapshot.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .const import (
    DEFAULT_AUTH_ERROR,
    LOGIN_REJECTED_MARKER,
    NO_CHANGE_MARKER,
    RAW_STATUS_MAP,
    RELOGIN_MARKER,
    AlarmStatus,
)
from .exceptions import PowerLinkStatusError
from .models import StatusUpdate

_INDEX_RE = re.compile(r"<index>(.+?)</index>", re.DOTALL)
_SYSTEM_RE = re.compile(r"<system>(.*?)</system>", re.DOTALL)
_STATUS_RE = re.compile(r"<status>(.+?)</status>", re.DOTALL)
_LOCKOUT_RE = re.compile(r"time left:(.+)")


def map_raw_status(raw_status: str) -> AlarmStatus:
    """Translate a raw ``<status>`` string, unknown strings map to UNKNOWN."""
    return RAW_STATUS_MAP.get(raw_status, AlarmStatus.UNKNOWN)


def parse_status_response(body: str) -> StatusUpdate:
    """Parse a reply from the status endpoint.

    Raises:
        PowerLinkStatusError: If the reply has neither the no-change marker
            nor a status fragment.
    """
    if NO_CHANGE_MARKER in body:
        return StatusUpdate(no_change=True)

    index_match = _INDEX_RE.search(body)
    index = index_match.group(1) if index_match else None

    # Older firmware omits the <system> wrapper
    system_match = _SYSTEM_RE.search(body)
    scope = system_match.group(1) if system_match else body

    status_match = _STATUS_RE.search(scope)
    if status_match is None:
        raise PowerLinkStatusError(
            f"Unexpected status response from panel: {body[:200]!r}"
        )

    raw_status = status_match.group(1)
    return StatusUpdate(
        no_change=False,
        index=index,
        raw_status=raw_status,
        status=map_raw_status(raw_status),
    )


def is_session_expired(body: str) -> bool:
    """Return True if the reply means the session cookie is no longer valid."""
    return body == "" or RELOGIN_MARKER in body


def parse_login_rejection(body: str) -> tuple[str, str | None] | None:
    """Check a login reply for a rejection.

    Returns:
        None if the login was accepted, otherwise ``(reason, lockout)`` where
        ``lockout`` is the remaining lockout time reported by the panel.
    """
    if LOGIN_REJECTED_MARKER not in body:
        return None

    lockout_match = _LOCKOUT_RE.search(body)
    if lockout_match is None:
        return DEFAULT_AUTH_ERROR, None

    lockout = lockout_match.group(1).strip()
    reason = (
        f"Locked out for {lockout}. Ensure username and password are correct, "
        f"and retry once the lockout time has elapsed."
    )
    return reason, lockout


def extract_cookie(set_cookie_headers: Iterable[str]) -> str | None:
    """Return the first cookie (``name=value``) from Set-Cookie headers."""
    first = next(iter(set_cookie_headers), None)
    if first is None:
        return None
    cookie = first.split(";", 1)[0].strip()
    return cookie or None
