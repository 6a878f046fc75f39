"""Error taxonomy.

Only ``ConfigurationError`` and ``FatalIOError`` ever leave the core. The two
recoverable kinds are raised and caught inside a single file/pattern or a
single HTTP request and never reach the caller.
"""


class RipError(Exception):
    """Base class for all scanner errors."""


class ConfigurationError(RipError):
    """Configuration is malformed; raised before any scan starts."""


class FatalIOError(RipError):
    """Directory unreadable during collection, or the log file can't be written."""


class RecoverablePatternError(RipError):
    """A single (file, pattern) match attempt failed."""


class RecoverableNetworkError(RipError):
    """A single web probe request failed."""


ABORT = "abort"
SKIP = "skip"

ERROR_POLICY = {
    ConfigurationError: ABORT,
    FatalIOError: ABORT,
    RecoverablePatternError: SKIP,
    RecoverableNetworkError: SKIP,
}


def policy_for(exc: BaseException) -> str:
    """Look up what to do with *exc*; anything unknown aborts."""
    for kind, action in ERROR_POLICY.items():
        if isinstance(exc, kind):
            return action
    return ABORT
