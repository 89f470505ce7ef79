# lumina/core/exceptions.py
from typing import Optional


class ValidationError(Exception):
    """Local input error (question text or access code); never sent over the network."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class InterpretationServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class BadRequest(InterpretationServiceError):
    status_code = 400


class Misconfigured(InterpretationServiceError):
    """The deployment is missing its upstream credential."""

    status_code = 500


class UpstreamError(InterpretationServiceError):
    """The text generator failed or produced nothing usable."""

    status_code = 502


class NetworkError(Exception):
    """The reading client could not get a usable answer from the interpretation service."""
