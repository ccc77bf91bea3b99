class AppError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(AppError):
    status_code = 400
    message = "Invalid request"


class ConflictError(AppError):
    status_code = 400
    message = "User already exists"


class AuthError(AppError):
    status_code = 400
    message = "Invalid credentials"


class TokenError(AppError):
    status_code = 401
    message = "Token is not valid"


class InvalidTokenError(TokenError):
    message = "Token is not valid"


class TokenExpiredError(TokenError):
    message = "Token has expired"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class UpstreamError(AppError):
    status_code = 500
    message = "Server error"


class UploadError(UpstreamError):
    message = "Media storage is unavailable"


class DatabaseError(UpstreamError):
    message = "Server error"


class PasswordHashingError(AppError):
    message = "Server error"
