# app/core/errors.py
"""
Error taxonomy shared by the storage adapters and services.

Absence is never an error: storage getters return None (and deletes
return False) when nothing matches.
"""


class StorageError(Exception):
    """Base class for failures raised by a storage backend."""


class BackendUnavailableError(StorageError):
    """The backing store could not be reached (connection / transport)."""


class DuplicateKeyError(StorageError):
    """A unique key (username, email, slug) is already taken."""

    def __init__(self, collection: str, detail: str | None = None):
        self.collection = collection
        message = f"Duplicate key in {collection}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EmptyCartError(Exception):
    """Checkout was attempted for a user whose cart has no lines."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"Cart is empty for user {user_id}")
