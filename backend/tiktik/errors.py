"""Domain errors raised by repositories and routers, mapped to HTTP statuses in main."""


class AppError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AppError):
    status_code = 400
    default_detail = "Invalid request"


class ConflictError(AppError):
    # Duplicate rows are reported as a bad request, like a duplicate registration
    status_code = 400
    default_detail = "Already exists"


class AuthError(AppError):
    status_code = 401
    default_detail = "Not authenticated"


class PermissionDeniedError(AppError):
    status_code = 403
    default_detail = "Not allowed"


class NotFoundError(AppError):
    status_code = 404
    default_detail = "Not found"


class StorageError(AppError):
    status_code = 500
    default_detail = "Internal server error"
