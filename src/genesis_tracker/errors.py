"""Error types shared by the storage layers and services."""


class GenesisError(Exception):
    """Base class for all genesis-tracker errors."""


class StorageCorrupt(GenesisError):
    """A local namespace holds data that cannot be parsed.

    LocalStore recovers from this internally by treating the namespace as
    empty; it never escapes a read.
    """


class StorageWriteError(GenesisError):
    """A local namespace could not be serialized or written."""


class NotAuthenticated(GenesisError):
    """A remote operation was attempted without an active session."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class BackendError(GenesisError):
    """The remote backend rejected or failed an operation."""


class AuthError(GenesisError):
    """Sign-up or sign-in was refused."""


class MigrationPartialFailure(GenesisError):
    """One namespace could not be transferred during migration."""

    def __init__(self, namespace: str, cause: BaseException):
        self.namespace = namespace
        self.cause = cause
        super().__init__(f"Migration of '{namespace}' failed: {cause}")
