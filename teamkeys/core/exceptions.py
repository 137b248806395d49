"""Error taxonomy for the service.

Every error carries an HTTP status, a stable code and a human readable
message. They are raised where detected and rendered by the handlers
registered in ``teamkeys.main``.
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    """Base application error with details."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Error message
            details: Optional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(AppError):
    status_code = 401
    code = "authentication_required"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class AuthorizationError(AppError):
    """The actor lacks permission for the requested action."""

    status_code = 403
    code = "authorization_error"

    def __init__(self, message: str = "Authorization error", reason: Optional[str] = None) -> None:
        super().__init__(message, details={"reason": reason} if reason else None)


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class ErrorResponse:
    """Error envelope returned for every failed request."""

    @staticmethod
    def create(
        status: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ) -> dict:
        """Create error response.

        Args:
            status: HTTP status code
            code: Stable error code
            message: Error message
            details: Optional error details

        Returns:
            Error response dictionary
        """
        return {
            "ok": False,
            "error": code,
            "message": message,
            "status": status,
            "details": details or {},
        }
