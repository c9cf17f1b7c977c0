"""
Application error taxonomy.
Challenge: Services raise domain errors; only the HTTP boundary knows about status codes.
Design: Each kind carries its status code so one exception handler can render all of them.
"""


class AppError(Exception):
    """Base for every error the service layer raises on purpose."""

    status_code: int = 500
    default_message: str = "internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# --- 400 ---

class ValidationError(AppError):
    status_code = 400
    default_message = "invalid input"


class CodeRequiredError(ValidationError):
    default_message = "code is required"


class TitleRequiredError(ValidationError):
    default_message = "title is required"


class DescriptionRequiredError(ValidationError):
    default_message = "description is required"


class InvalidPriceError(ValidationError):
    default_message = "price must be greater than zero"


class InvalidStockError(ValidationError):
    default_message = "stock cannot be negative"


class UsernameRequiredError(ValidationError):
    default_message = "username is required"


class PasswordTooShortError(ValidationError):
    default_message = "password must be at least 6 characters"


# --- 404 ---

class NotFoundError(AppError):
    status_code = 404
    default_message = "resource not found"


class ItemNotFoundError(NotFoundError):
    default_message = "item not found"


class UserNotFoundError(NotFoundError):
    default_message = "user not found"


# --- 409 ---

class DuplicateError(AppError):
    status_code = 409
    default_message = "resource already exists"


class DuplicateCodeError(DuplicateError):
    default_message = "item with this code already exists"


class DuplicateUsernameError(DuplicateError):
    default_message = "user with this username already exists"


# --- 401 ---

class AuthenticationError(AppError):
    status_code = 401
    default_message = "authentication failed"


class InvalidCredentialsError(AuthenticationError):
    default_message = "invalid username or password"


class InvalidTokenError(AuthenticationError):
    default_message = "invalid or expired token"


# --- 500 ---

class InternalError(AppError):
    status_code = 500
    default_message = "internal server error"


class HashingError(InternalError):
    default_message = "failed to hash password"


class SigningError(InternalError):
    default_message = "failed to sign token"


class CorruptRecordError(InternalError):
    default_message = "stored record is inconsistent"


class StorageError(InternalError):
    default_message = "storage backend failure"
