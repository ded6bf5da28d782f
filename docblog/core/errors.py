from fastapi import status


class DocblogError(Exception):
    """Base for errors that map onto a JSON error response."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_SERVER_ERROR"
    message = "Internal server error"

    def __init__(self, message: str | None = None, *, errors: list[str] | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message
        self.errors = errors or []


class ValidationError(DocblogError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Validation error"


class DuplicateEmailError(DocblogError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "DUPLICATE_EMAIL"
    message = "Email already registered. Please use a different email or login."


class InvalidCredentialsError(DocblogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class AuthenticationRequiredError(DocblogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTHENTICATION_REQUIRED"
    message = "Authentication required"


class InvalidTokenError(DocblogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_TOKEN"
    message = "Token is not valid"


class NotAuthorizedError(DocblogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "NOT_AUTHORIZED"
    message = "Not authorized"


class NotFoundError(DocblogError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Resource not found"


class InvalidIdError(DocblogError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_ID_FORMAT"
    message = "Invalid id format"


class UnsupportedMediaError(DocblogError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "UNSUPPORTED_MEDIA"
    message = "Only image files are allowed (jpeg, jpg, png, gif, webp)"


class StoreUnavailableError(DocblogError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "STORE_UNAVAILABLE"
    message = "Storage is temporarily unavailable. Please retry."


class InternalError(DocblogError):
    pass


class ConfigurationError(DocblogError):
    code = "CONFIGURATION_ERROR"
    message = "Server is misconfigured"
