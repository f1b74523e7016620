"""navperf exception hierarchy.

All navperf exceptions inherit from NavPerfError for easy catching.
"""


class NavPerfError(Exception):
    """Base exception for all navperf errors."""

    pass


class ConfigurationError(NavPerfError):
    """Raised when configuration is invalid or missing."""

    pass


class MissingMarkError(NavPerfError):
    """Raised when a required performance mark doesn't exist."""

    def __init__(self, markName: str):
        self.markName = markName
        super().__init__(f"Performance mark '{markName}' not found")


class UnknownEventError(NavPerfError, TypeError):
    """Raised when dispatching an object that is not a performance event."""

    def __init__(self, event: object):
        self.event = event
        super().__init__(f"Not a performance event: {type(event).__name__}")


class ScriptError(NavPerfError):
    """Raised when a navigation script is invalid."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Invalid navigation script '{path}': {message}")
