"""
Exceptions raised by the FitTrack backend wiring and test harness.

Errors coming back from the emulated AWS services are not wrapped: callers see
the unmodified ``botocore.exceptions.ClientError``. The classes below cover the
conditions the harness itself detects.
"""


class BackendError(Exception):
    """Base exception for backend wiring errors."""
    pass


class DuplicateAppError(BackendError):
    """Raised when a backend app with the same name is already initialized."""
    pass


class EmulatorAlreadyConfiguredError(BackendError):
    """Raised when a client is pointed at an emulator a second time."""
    pass


class EmulatorUnavailableError(BackendError):
    """Raised when an emulator endpoint does not accept connections."""
    pass


class HarnessNotInitializedError(BackendError):
    """Raised when a harness operation runs before ``initialize()``."""
    pass
