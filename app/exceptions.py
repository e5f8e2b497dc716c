"""Application error taxonomy.

Services raise these; ``main.py`` maps them to JSON responses. ``detail`` is
always safe to show to the caller.
"""


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AppError):
    status_code = 400
    default_detail = "Invalid request"


class ConflictError(AppError):
    status_code = 400
    default_detail = "Resource already exists"


class WeakPasswordError(AppError):
    status_code = 400
    default_detail = (
        "Password must have at least 8 characters, including 1 uppercase, "
        "1 lowercase, 1 number, and 1 special character (@$!%*?&)."
    )


class InvalidOrExpiredTokenError(AppError):
    status_code = 400
    default_detail = "Invalid or expired token"


class UnauthenticatedError(AppError):
    status_code = 401
    default_detail = "Not authenticated"


class ExpiredTokenError(UnauthenticatedError):
    default_detail = "Token has expired"


class InvalidTokenError(UnauthenticatedError):
    status_code = 403
    default_detail = "Invalid token"


class InvalidCredentialsError(AppError):
    status_code = 401
    default_detail = "Invalid username or password"


class ForbiddenError(AppError):
    status_code = 403
    default_detail = "Not allowed"


class NotFoundError(AppError):
    status_code = 404
    default_detail = "Not found"


class InternalError(AppError):
    pass
