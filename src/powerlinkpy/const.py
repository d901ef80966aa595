"""Constants for the powerlinkpy library."""

from enum import StrEnum

# The module fails the TLS handshake, so the local interface is plain HTTP
URL_SCHEME = "http"

# Endpoint paths (all POST, form-encoded)
LOGIN_PATH = "/web/ajax/login.login.ajax.php"
STATUS_PATH = "/web/ajax/alarm.chkstatus.ajax.php"
COMMAND_PATH = "/web/ajax/security.main.status.ajax.php"

# Request defaults
DEFAULT_TIMEOUT = 2.5  # seconds
RELOGIN_DELAY = 3.0  # seconds before retrying with a fresh cookie
MAX_RELOGIN_RETRIES = 1

# Status cursor sent on the first status read
STATUS_INDEX_SENTINEL = "0"
SESSION_USER_MANAGER = "1"

# Markers in panel response bodies
LOGIN_REJECTED_MARKER = "NOT::"
RELOGIN_MARKER = "[RELOGIN]"
NO_CHANGE_MARKER = "<customStatus>[NOCNG]</customStatus>"

DEFAULT_AUTH_ERROR = "Invalid PowerLink2 username or password provided"

USER_AGENT = "powerlinkpy/0.1.0"


class AlarmStatus(StrEnum):
    """Alarm system states."""

    DISARMED = "disarmed"
    ARMED_HOME = "home"
    ARMED_AWAY = "away"
    # Read-only: the system has begun arming and is letting people leave
    EXIT_DELAY = "exit delay"
    UNKNOWN = "unknown"

    @property
    def is_settable(self) -> bool:
        """Return True if this status can be requested from the panel."""
        return self in STATUS_TO_COMMAND


# Raw <status> strings reported by the panel
RAW_STATUS_MAP: dict[str, AlarmStatus] = {
    "Ready": AlarmStatus.DISARMED,
    "NotReady": AlarmStatus.DISARMED,
    "Exit Delay": AlarmStatus.EXIT_DELAY,
    "HOME": AlarmStatus.ARMED_HOME,
    "AWAY": AlarmStatus.ARMED_AWAY,
}

# Values of the "set" form field for each settable status
STATUS_TO_COMMAND: dict[AlarmStatus, str] = {
    AlarmStatus.DISARMED: "Disarm",
    AlarmStatus.ARMED_HOME: "ArmHome",
    AlarmStatus.ARMED_AWAY: "ArmAway",
}
