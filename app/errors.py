# app/errors.py
from typing import Optional

from app.utils.api_errors import GENERIC_ERROR


class PortalError(Exception):
    """Anything a screen should show the user as a single sentence."""


class ValidationError(PortalError):
    """Local precondition failed; nothing was sent."""


class ApiRequestError(PortalError):
    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class NetworkError(PortalError):
    def __init__(self, message: str = GENERIC_ERROR, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
