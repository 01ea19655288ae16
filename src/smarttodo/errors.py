"""Summary: Exception types for SmartTodo.

Importance: Separates persistence failures from labeled operation failures.
Alternatives: Raise RuntimeError everywhere and match on messages.
"""


class SmartTodoError(Exception):
    """Base exception for SmartTodo errors."""


class StorageError(SmartTodoError):
    """The key-value store could not be read or written."""


class ServiceError(SmartTodoError):
    """A repository operation failed; the message names the operation."""
