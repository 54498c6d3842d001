"""Service-layer errors and the HTTP status each maps to."""
from typing import List, Optional

class GatePassError(Exception):
    """Base class for errors raised by services."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors or []

class NotFoundError(GatePassError):
    status_code = 404

class ValidationFailedError(GatePassError):
    status_code = 400

class ConflictError(GatePassError):
    status_code = 409

class UnauthorizedError(GatePassError):
    status_code = 401

class ForbiddenError(UnauthorizedError):
    status_code = 403
