"""Error kinds raised by the arcade services.

Each error carries a ``kind`` so callers can tell a bad request apart from a
storage failure without inspecting messages. Mapping kinds to HTTP status
codes is done by the API layer (see ``arcade.main``).
"""


class ArcadeError(Exception):
    kind = 'error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ArcadeError):
    """The caller supplied a malformed or incomplete request."""
    kind = 'validation'


class ConflictError(ArcadeError):
    """A unique identity field (username, email) is already in use."""
    kind = 'conflict'


class AuthenticationError(ArcadeError):
    kind = 'authentication'


class StorageError(ArcadeError):
    """The store is unreachable, rejected a write, or a read failed."""
    kind = 'storage'
