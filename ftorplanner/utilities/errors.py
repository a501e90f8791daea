"""Error taxonomy shared by the store, repositories and services.

StorageError    -> I/O or (de)serialization failure on the key-value layer
ValidationError -> malformed input (backup document, missing meal name, ...)
ConstraintError -> settings update that would break the meal-type invariant
"""


class PlannerError(Exception):
    """Base class for every error raised by the planner core."""


class StorageError(PlannerError):
    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class ValidationError(PlannerError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ValidationError):
    """Raised when an update targets an id that is not in the collection."""


class ConstraintError(PlannerError):
    pass


__all__ = ['PlannerError', 'StorageError', 'ValidationError', 'NotFoundError', 'ConstraintError']
