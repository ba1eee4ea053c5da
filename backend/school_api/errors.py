"""Typed failures raised by the service layer and rendered by ``main.create_app``."""

from fastapi import status


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    body_key = "error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {self.body_key: self.message}


class RecordNotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    body_key = "message"
    default_message = "Not found"


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class MissingToken(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    body_key = "message"
    default_message = "Access token required"


class InvalidToken(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    body_key = "message"
    default_message = "Invalid or expired token"


class ConstraintViolation(ServiceError):
    """A write rejected by a database constraint (unique email, foreign key)."""


class PersistenceFailure(ServiceError):
    """Any other database error."""
