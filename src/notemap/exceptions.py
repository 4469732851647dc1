"""Custom exceptions for notemap."""


class NotemapError(RuntimeError):
    """Base exception for notemap host operations."""


class SessionNotFoundError(NotemapError):
    """No session exists with the requested id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"session not found: {session_id}")
        self.session_id = session_id


class InvalidEditOperationError(NotemapError):
    """An editor operation is unknown or is missing a required argument."""
