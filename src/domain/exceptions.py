"""Domain exceptions for the Tubely media service."""

from __future__ import annotations


class DomainException(Exception):
    """Base exception for domain errors."""


# =============================================================================
# Client faults
# =============================================================================


class ValidationException(DomainException):
    """Raised when a request is malformed. No side effects are performed."""

    def __init__(self, reason: str, field: str | None = None) -> None:
        self.reason = reason
        self.field = field
        super().__init__(reason)


class InvalidVideoIdException(ValidationException):
    """Raised when a video identifier is not a valid UUID."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid video ID: '{value}'", field="video_id")


class UnsupportedMediaTypeException(ValidationException):
    """Raised when an upload declares a media type we don't accept."""

    def __init__(self, media_type: str, allowed: list[str]) -> None:
        self.media_type = media_type
        self.allowed = allowed
        super().__init__(
            f"Media type '{media_type}' is not supported. "
            f"Allowed: {', '.join(allowed)}",
            field="video",
        )


class PayloadTooLargeException(ValidationException):
    """Raised when the request body exceeds the upload ceiling."""

    def __init__(self, limit_bytes: int) -> None:
        self.limit_bytes = limit_bytes
        super().__init__(f"Request body exceeds {limit_bytes} bytes")


# =============================================================================
# Access control
# =============================================================================


class AuthException(DomainException):
    """Base class for authentication and authorization failures."""


class UnauthenticatedException(AuthException):
    """Raised when credentials are missing or invalid."""

    def __init__(self, reason: str = "Missing or invalid credentials") -> None:
        self.reason = reason
        super().__init__(reason)


class NotVideoOwnerException(AuthException):
    """Raised when the caller is not the owner of the video."""

    def __init__(self, video_id: str, user_id: str) -> None:
        self.video_id = video_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not the owner of video {video_id}")


class VideoNotFoundException(DomainException):
    """Raised when a requested video is not found."""

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(f"Video not found: {video_id}")


# =============================================================================
# Server faults
# =============================================================================


class StagingException(DomainException):
    """Raised when an upload cannot be written to local staging."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Staging failed: {reason}")


class MediaProcessingException(DomainException):
    """Raised when the remux or probe tool fails or returns garbage.

    ``diagnostics`` holds the tool's captured stderr. It is logged server
    side and must never be sent to the client.
    """

    def __init__(
        self,
        stage: str,
        reason: str,
        diagnostics: str = "",
        exit_code: int | None = None,
    ) -> None:
        self.stage = stage
        self.reason = reason
        self.diagnostics = diagnostics
        self.exit_code = exit_code
        super().__init__(f"Media processing failed at {stage}: {reason}")


class StorageException(DomainException):
    """Raised when durable object storage rejects an operation."""

    def __init__(self, bucket: str, key: str, reason: str) -> None:
        self.bucket = bucket
        self.key = key
        self.reason = reason
        super().__init__(f"Storage operation failed for {bucket}/{key}: {reason}")


class MalformedLocationException(DomainException):
    """Raised when a persisted video location cannot be decoded."""

    def __init__(self, value: str, reason: str = "expected '<bucket>,<key>'") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed video location '{value}': {reason}")
