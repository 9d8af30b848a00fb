class AuthError(Exception):
    """Base for errors that are safe to show to a client.

    ``message`` is the only text that reaches the response body; anything
    passed as ``reason`` stays in the logs.
    """
    status_code = 400
    message = "Bad request"

    def __init__(self, reason: str | None = None):
        super().__init__(reason or self.message)
        self.reason = reason or self.message


class ValidationError(AuthError):
    status_code = 400
    message = "Invalid request"


class DuplicateEmail(AuthError):
    status_code = 400
    message = "Registration failed"


class InvalidCredentials(AuthError):
    status_code = 401
    message = "Invalid credentials"


class InvalidToken(AuthError):
    status_code = 401
    message = "Invalid token"


class PermissionDenied(AuthError):
    status_code = 403
    message = "Forbidden"


class UserNotFound(AuthError):
    status_code = 404
    message = "User not found"
