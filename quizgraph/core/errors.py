"""
Domain errors raised by the service and store layers.

Messages are part of the API: GraphQL reports ``str(error)`` to the client.
"""


class QuizGraphError(Exception):
    """Base class for all errors raised by quizgraph."""


class DuplicateUserError(QuizGraphError):
    def __init__(self, message: str = "User with this email address already exists") -> None:
        super().__init__(message)


class InvalidCredentialsError(QuizGraphError):
    # Same message for unknown email and wrong password.
    def __init__(self, message: str = "Invalid Credentials") -> None:
        super().__init__(message)


class InvalidTokenError(QuizGraphError):
    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)


class ValidationError(QuizGraphError):
    """Malformed mutation input."""


class NotFoundError(QuizGraphError):
    """Reserved for lookups that must exist; relational fields return null instead."""


class SlugGenerationError(QuizGraphError):
    """No free slug found within the configured number of attempts."""


class StoreError(QuizGraphError):
    """Entity store failure."""


class DuplicateKeyError(StoreError):
    """Insert rejected by a unique key of the store."""

    def __init__(self, collection: str, field: str, value: object) -> None:
        self.collection = collection
        self.field = field
        self.value = value
        super().__init__(f"Duplicate value for {collection}.{field}: {value!r}")
