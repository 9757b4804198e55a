"""Domain layer - business models and logic."""

from src.domain.exceptions import (
    AuthException,
    DomainException,
    InvalidVideoIdException,
    MalformedLocationException,
    MediaProcessingException,
    NotVideoOwnerException,
    PayloadTooLargeException,
    StagingException,
    StorageException,
    UnauthenticatedException,
    UnsupportedMediaTypeException,
    ValidationException,
    VideoNotFoundException,
)
from src.domain.models import VideoRecord
from src.domain.value_objects import (
    AspectClass,
    ObjectKey,
    VideoGeometry,
    VideoLocation,
)

__all__ = [
    # Exceptions
    "DomainException",
    "ValidationException",
    "InvalidVideoIdException",
    "UnsupportedMediaTypeException",
    "PayloadTooLargeException",
    "AuthException",
    "UnauthenticatedException",
    "NotVideoOwnerException",
    "VideoNotFoundException",
    "StagingException",
    "MediaProcessingException",
    "StorageException",
    "MalformedLocationException",
    # Models
    "VideoRecord",
    # Value Objects
    "AspectClass",
    "ObjectKey",
    "VideoGeometry",
    "VideoLocation",
]
