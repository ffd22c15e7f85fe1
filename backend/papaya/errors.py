"""
Domain errors raised by the services layer.

Services raise these and never translate them into HTTP responses; the
mapping to status codes lives in ``papaya.main``.
"""

from typing import Optional


class PapayaError(Exception):
    """Base class for every error a service operation can raise"""

    code = "error"
    default_message = "Operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PapayaError):
    code = "validation_error"
    default_message = "Invalid input"


class Unauthenticated(PapayaError):
    code = "unauthenticated"
    default_message = "Not authenticated"


class Forbidden(PapayaError):
    code = "forbidden"
    default_message = "Forbidden"


class NotFound(PapayaError):
    code = "not_found"
    default_message = "Not found"


class UnsupportedFormat(PapayaError):
    code = "unsupported_format"
    default_message = "Operation not supported for this tournament format"


class AlreadyRegistered(PapayaError):
    code = "already_registered"
    default_message = "Already registered"


class InsufficientPlayers(PapayaError):
    code = "insufficient_players"
    default_message = "Need at least 2 players"


class StoreFailure(PapayaError):
    code = "store_failure"
    default_message = "Persistence error"
