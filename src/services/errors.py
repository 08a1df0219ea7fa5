from typing import Iterable, Optional


class TaskboardError(Exception):
    """Base class for errors surfaced to the user as inline messages."""


class ValidationError(TaskboardError):
    def __init__(self, message: str, fields: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotAuthenticatedError(TaskboardError):
    def __init__(self, message: str = "Log in to manage tasks."):
        super().__init__(message)
