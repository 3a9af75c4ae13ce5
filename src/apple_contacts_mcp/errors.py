class ContactsError(Exception):
    """Base class for failures talking to the Contacts app."""


class PreconditionError(ContactsError):
    """A check that must pass before any contact data is read has failed."""


class BridgeUnavailableError(PreconditionError):
    def __init__(self) -> None:
        super().__init__("System Events not accessible")


class DataSourceUnavailableError(PreconditionError):
    def __init__(self) -> None:
        super().__init__("Contacts app not accessible - permission not granted")


class AutomationExecutionError(ContactsError):
    """osascript exited non-zero. Only the exit code is carried; raw output stays in the log."""

    def __init__(self, exit_code: int | None, message: str | None = None):
        self.exit_code = exit_code
        super().__init__(message or f"Failed to execute AppleScript (exit code: {exit_code})")


class ScriptTimeoutError(AutomationExecutionError):
    def __init__(self, timeout_seconds: float, exit_code: int | None = None):
        self.timeout_seconds = timeout_seconds
        super().__init__(exit_code, f"AppleScript timed out after {timeout_seconds:g}s")
