"""
Engine exceptions.

Invalid user-entered records are not exceptional and are reported through
ValidationResult instead. These exceptions signal caller programming errors.
"""


class PerformanceEngineError(ValueError):
    """Base class for engine errors."""


class UnsupportedProgramError(PerformanceEngineError):
    """Raised when no adapter exists for the requested program."""

    def __init__(self, program: str):
        self.program = program
        super().__init__(f"No performance adapter registered for program: {program}")


class ProgramMismatchError(PerformanceEngineError):
    """Raised when a session is handed to the adapter of another program."""

    def __init__(self, expected: str, actual: str, session_id: str = ""):
        self.expected = expected
        self.actual = actual
        self.session_id = session_id
        super().__init__(
            f"Session {session_id or '<unknown>'} belongs to program '{actual}', "
            f"adapter handles '{expected}'"
        )
