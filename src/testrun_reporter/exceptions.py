"""
Custom exception hierarchy for testrun-reporter.
"""


class ReporterError(Exception):
    """Base exception for all testrun-reporter errors."""
    pass


# === Session Errors ===

class SessionNotFoundError(ReporterError):
    """Session id looked up before its root suite started."""
    def __init__(self, session_id: str, known: list[str] | None = None):
        self.session_id = session_id
        self.known = known or []
        super().__init__(
            f"Session {session_id!r} is not registered. Known sessions: {self.known}"
        )


# === Coverage Errors ===

class CoverageError(ReporterError):
    """Base exception for coverage-related errors."""
    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class CoverageFormatError(CoverageError):
    """Snapshot is not a mapping of file path to file coverage."""
    pass


class CoverageArtifactError(CoverageError):
    """A coverage artifact on disk exists but cannot be parsed."""
    def __init__(self, path: str, cause: Exception):
        self.cause = cause
        super().__init__(f"Coverage artifact '{path}' is malformed: {cause}", path=path)


# === Replay Errors ===

class ReplayError(ReporterError):
    """Recorded event log could not be replayed."""
    def __init__(self, message: str, line_no: int = 0):
        self.line_no = line_no
        super().__init__(f"line {line_no}: {message}" if line_no else message)


# === Config Errors ===

class ConfigurationError(ReporterError):
    """Configuration error."""
    pass
