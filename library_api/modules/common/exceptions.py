"""Domain exception classes for business logic errors."""


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    pass


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    pass


class ResourceExistsError(DomainError):
    """Raised when attempting to create a resource that already exists."""

    pass


class AuthenticationError(DomainError):
    """Raised when a caller cannot be authenticated."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised on login with an unknown username or a wrong password.

    Both causes share one message so usernames cannot be enumerated.
    """

    def __init__(self, message: str = "Invalid username or password."):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token is missing, malformed, tampered with or expired."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class BookNotFoundError(ResourceNotFoundError):
    """Raised when no book has the requested id."""

    def __init__(self, book_id: int | None = None, message: str = "Book not found."):
        super().__init__(message)
        self.book_id = book_id


class UsernameTakenError(ResourceExistsError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str | None = None, message: str = "Username is already taken."):
        super().__init__(message)
        self.username = username
