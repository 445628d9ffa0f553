class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    """Raised when caller-supplied data fails a precondition."""

    def __init__(self, message: str = "Invalid input", fields: dict[str, str] | None = None):
        super().__init__(message)
        self.fields = fields or {}


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str = "Resource", id: str = ""):
        super().__init__(f"{resource} not found: {id}" if id else f"{resource} not found")


class ConflictError(AppError):
    """Raised when a write would violate a uniqueness constraint."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


class AuthenticationError(AppError):
    """Raised when credentials are invalid."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AuthorizationError(AppError):
    """Raised when a user lacks permission for an action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)


class InternalError(AppError):
    """Raised when storage fails; the surrounding transaction has been rolled back."""

    def __init__(self, message: str = "Internal error"):
        super().__init__(message)


class DeadlineExceededError(AppError):
    """Raised when an operation outlives its deadline and was rolled back."""

    def __init__(self, message: str = "Operation timed out"):
        super().__init__(message)
