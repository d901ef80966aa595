"""Tests for powerlinkpy exceptions."""

from powerlinkpy.exceptions import (
    PowerLinkAuthBlockedError,
    PowerLinkAuthError,
    PowerLinkConnectionError,
    PowerLinkError,
    PowerLinkSessionError,
    PowerLinkStatusError,
    PowerLinkUnsupportedStatusError,
)


def test_exception_hierarchy() -> None:
    assert issubclass(PowerLinkAuthError, PowerLinkError)
    assert issubclass(PowerLinkAuthBlockedError, PowerLinkAuthError)
    assert issubclass(PowerLinkConnectionError, PowerLinkError)
    assert issubclass(PowerLinkSessionError, PowerLinkError)
    assert issubclass(PowerLinkStatusError, PowerLinkError)
    assert issubclass(PowerLinkUnsupportedStatusError, PowerLinkError)


def test_auth_error_lockout() -> None:
    err = PowerLinkAuthError("locked", lockout="5 minutes")
    assert err.lockout == "5 minutes"
    assert str(err) == "locked"


def test_auth_error_no_lockout() -> None:
    err = PowerLinkAuthError("bad password")
    assert err.lockout is None
