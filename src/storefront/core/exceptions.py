"""Exceptions that map onto HTTP error responses for the JSON API."""


class ApiError(Exception):
    """Base error rendered by ApiErrorMiddleware as a JSON body."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str = None, errors: dict = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def as_dict(self) -> dict:
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidRequest(ApiError):
    """Malformed body or failed form validation."""

    status_code = 400
    default_message = "Invalid request"


class Forbidden(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"
