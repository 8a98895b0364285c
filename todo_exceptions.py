"""
Errors raised by the todo store adapter.
"""


class TodoStoreError(Exception):
    """Base class for errors raised by the store adapter."""
    pass


class InvalidTodoId(TodoStoreError):
    """The supplied id is not a well-formed ObjectId."""
    pass


class TodoNotFound(TodoStoreError):
    """No record matches a well-formed id."""
    pass


class StoreError(TodoStoreError):
    """Talking to MongoDB failed, or a stored document could not be decoded."""
    pass
