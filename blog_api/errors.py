"""
Error types for django-blog-api.

Every error carries the message and HTTP status the API responds with.
Views render them as ``{"error": detail}``.
"""


class BlogApiError(Exception):
    """Base exception for errors returned to API clients."""

    status_code = 400

    def __init__(self, detail, status_code=None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code

    def __str__(self):
        return self.detail


class ValidationError(BlogApiError):
    """Missing, short or malformed input."""


class UploadError(BlogApiError):
    """Photo could not be parsed, decoded or is too large."""


class NotFoundError(BlogApiError):
    status_code = 404


class PersistenceError(BlogApiError):
    """A database write or read failed."""


class AuthenticationRequired(BlogApiError):
    status_code = 401


class PermissionDenied(BlogApiError):
    status_code = 403
