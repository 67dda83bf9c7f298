from typing import Optional


class AppError(Exception):
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    status_code = 400
    message = "Validation error"


class EmailAlreadyExists(ValidationError):
    message = "Email already exists"


class AuthenticationError(AppError):
    status_code = 401
    message = "Authentication failed"


class InvalidCredentials(AuthenticationError):
    message = "Invalid credentials"


class AuthorizationError(AppError):
    status_code = 403
    message = "Not authorized"


class MissingToken(AuthorizationError):
    status_code = 401
    message = "Missing token"


class InvalidOrExpiredToken(AuthorizationError):
    status_code = 403
    message = "Invalid token"


class InternalError(AppError):
    status_code = 500
    message = "Internal server error"


class TokenError(Exception):
    """Raised by the token codec; `kind` tells which check failed."""

    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"

    def __init__(self, kind: str, detail: str = ""):
        super().__init__(f"{kind}: {detail}" if detail else kind)
        self.kind = kind
