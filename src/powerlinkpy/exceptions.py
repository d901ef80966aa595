"""Exceptions for the powerlinkpy library."""


class PowerLinkError(Exception):
    """Base exception for powerlinkpy."""


class PowerLinkConnectionError(PowerLinkError):
    """Raised when the panel cannot be reached or the request times out."""


class PowerLinkAuthError(PowerLinkError):
    """Raised when the panel rejects the login (bad credentials or lockout)."""

    def __init__(self, message: str, lockout: str | None = None) -> None:
        super().__init__(message)
        self.lockout = lockout


class PowerLinkAuthBlockedError(PowerLinkAuthError):
    """Raised when a previous login was rejected and no new attempt is made."""


class PowerLinkUnsupportedStatusError(PowerLinkError):
    """Raised when asked to set a status the panel can only report."""


class PowerLinkStatusError(PowerLinkError):
    """Raised when the status could not be read or parsed."""


class PowerLinkSessionError(PowerLinkError):
    """Raised when the panel keeps invalidating freshly issued cookies."""
