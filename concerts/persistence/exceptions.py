"""Persistence layer exceptions."""

from typing import Optional

ERROR_CREATING_STORE = "Unable to create store"
ERROR_CLOSING_STORE = "Unable to close store"
ERROR_SAVING_CONCERT = "Unable to save Concert"
ERROR_DELETING_CONCERT = "Unable to delete Concert"
ERROR_LOADING_CONCERT = "Unable to retrieve Concert"
ERROR_LOADING_ALL_CONCERTS = "Unable to retrieve all Concerts"


class StoreError(Exception):
    """Raised when a store operation fails.

    This is the only error type the store surfaces. The underlying driver or
    I/O error is chained as __cause__, and operation names the store method
    that failed (create, save, delete, get_by_id, get_all, close).

    A missing row is not an error: get_by_id returns None instead.
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
