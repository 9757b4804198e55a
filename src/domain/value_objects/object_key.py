"""Object key derivation and media type helpers."""

from __future__ import annotations

import base64
import re
import secrets
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from src.domain.exceptions import ValidationException
from src.domain.value_objects.video_geometry import AspectClass

# Number of random bytes behind each object identifier
KEY_ENTROPY_BYTES = 32

MEDIA_TYPE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9!#$&^_.+-]*/[a-z0-9][a-z0-9!#$&^_.+-]*$")


def parse_media_type(header: str | None) -> str:
    """Normalise a Content-Type header into a bare ``type/subtype``.

    Parameters such as ``; codecs=...`` are dropped and the result is
    lowercased.

    Args:
        header: Raw Content-Type value.

    Returns:
        Normalised media type.

    Raises:
        ValidationException: If the header is missing or malformed.
    """
    if not header:
        raise ValidationException("Missing media type", field="content_type")

    media_type = header.split(";", 1)[0].strip().lower()
    if not MEDIA_TYPE_PATTERN.match(media_type):
        raise ValidationException(
            f"Malformed media type: '{header}'", field="content_type"
        )
    return media_type


def media_subtype(media_type: str) -> str:
    """Get the subtype of a normalised media type ("video/mp4" -> "mp4")."""
    return media_type.split("/", 1)[1]


def generate_object_id(token_source: Callable[[int], bytes] = secrets.token_bytes) -> str:
    """Generate an opaque URL-safe identifier with no padding.

    Args:
        token_source: Source of random bytes. Must be cryptographically secure
            outside of tests.

    Returns:
        URL-safe base64 string (43 characters for 32 bytes).
    """
    raw = token_source(KEY_ENTROPY_BYTES)
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


class ObjectKey(BaseModel):
    """Storage object key: ``<aspect>/<object_id>.<extension>``."""

    model_config = ConfigDict(frozen=True)

    aspect_class: AspectClass
    object_id: str = Field(pattern=r"^[A-Za-z0-9_-]+$")
    extension: str = Field(min_length=1)

    @property
    def value(self) -> str:
        """The full key as used by the object store."""
        return f"{self.aspect_class.value}/{self.object_id}.{self.extension}"

    def __str__(self) -> str:
        return self.value


def derive_object_key(
    aspect_class: AspectClass,
    media_type: str,
    token_source: Callable[[int], bytes] = secrets.token_bytes,
) -> ObjectKey:
    """Compose a fresh object key for an upload.

    The key space is large enough that no existence check is made.

    Args:
        aspect_class: Geometry bucket of the processed video.
        media_type: Normalised media type; its subtype becomes the extension.
        token_source: Random byte source (injectable for tests).

    Returns:
        A new object key.
    """
    return ObjectKey(
        aspect_class=aspect_class,
        object_id=generate_object_id(token_source),
        extension=media_subtype(media_type),
    )
