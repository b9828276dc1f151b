"""
Application exceptions

Services raise these; the handler registered in ``main.py`` turns them
into the standard JSON error payload with the matching status code.
"""


class AppException(Exception):
    """
    Base application exception.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = 400,
        details: str = None
    ):
        """
        Args:
            error_code (str): Unique business error identifier
            message (str): User-friendly error message
            status_code (int): HTTP status code (default: 400)
            details (str): Optional internal/debug details
        """
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details

        super().__init__(message)

    def to_dict(self) -> dict:
        error = {"code": self.error_code}
        if self.details:
            error["details"] = self.details
        return error


class ValidationException(AppException):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, details: str = None):
        super().__init__(
            error_code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details
        )


class InvalidOtpException(AppException):
    def __init__(self, message: str = "Invalid or expired OTP"):
        super().__init__(
            error_code="INVALID_OTP",
            message=message,
            status_code=400
        )


class UnauthorizedException(AppException):
    """Raised when the session is missing or invalid."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            error_code="UNAUTHORIZED",
            message=message,
            status_code=401
        )


class ForbiddenException(AppException):
    """Raised when an authenticated caller lacks the required role."""

    def __init__(self, message: str = "Unauthorized: Admin access denied"):
        super().__init__(
            error_code="FORBIDDEN",
            message=message,
            status_code=403
        )


class NotFoundException(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            error_code="NOT_FOUND",
            message=message,
            status_code=404
        )


class UpstreamException(AppException):
    """Raised when OpenAI or the SMS provider fails."""

    def __init__(self, message: str, details: str = None):
        super().__init__(
            error_code="UPSTREAM_ERROR",
            message=message,
            status_code=502,
            details=details
        )


class PersistenceException(AppException):
    def __init__(self, message: str = "Database write failed", details: str = None):
        super().__init__(
            error_code="PERSISTENCE_ERROR",
            message=message,
            status_code=500,
            details=details
        )


class UnprocessableException(AppException):
    """Raised when a well-formed value is outside the allowed set."""

    def __init__(self, message: str, details: str = None):
        super().__init__(
            error_code="UNPROCESSABLE",
            message=message,
            status_code=422,
            details=details
        )
