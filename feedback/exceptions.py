# feedback/exceptions.py
"""
Errors the services raise. Only these kinds are observable at the HTTP
boundary; the errors blueprint maps each to a status code.
"""


class FeedbackError(Exception):
    status_code = 500
    public_message = "Something went wrong."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class NotFoundError(FeedbackError):
    """Unknown hash, unknown id or failed admin token. Never says which."""
    status_code = 404
    public_message = "Resource not found."


class ValidationError(FeedbackError):
    status_code = 400
    public_message = "Invalid input."


class UnauthenticatedError(ValidationError):
    """A comment was attempted without a display name bound to the session."""
    status_code = 401
    public_message = "Username not set."


class RateLimitedError(FeedbackError):
    status_code = 429
    public_message = "Rate limit exceeded."


class HashCollisionError(FeedbackError):
    # bounded retry exhausted
    status_code = 500
    public_message = "Creation failed."


class StorageError(FeedbackError):
    status_code = 500
    public_message = "Creation failed."
