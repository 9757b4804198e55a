"""Video location value object.

A video's storage location is persisted as one flat string field on the
record. This module owns the only encoding for it:
``"<bucket><DELIMITER><key>"``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.exceptions import MalformedLocationException

DELIMITER = ","


class VideoLocation(BaseModel):
    """Bucket and object key of a stored video.

    Examples:
        >>> loc = VideoLocation(bucket="tubely-videos", key="landscape/abc.mp4")
        >>> loc.encode()
        'tubely-videos,landscape/abc.mp4'

        >>> VideoLocation.decode("tubely-videos,landscape/abc.mp4").key
        'landscape/abc.mp4'
    """

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(min_length=1, description="Storage bucket / namespace")
    key: str = Field(min_length=1, description="Object key within the bucket")

    @field_validator("bucket", "key")
    @classmethod
    def reject_delimiter(cls, v: str) -> str:
        """Neither part may contain the delimiter."""
        if DELIMITER in v:
            msg = f"Location parts must not contain '{DELIMITER}': '{v}'"
            raise ValueError(msg)
        return v

    def encode(self) -> str:
        """Encode into the persisted string form."""
        return f"{self.bucket}{DELIMITER}{self.key}"

    @classmethod
    def decode(cls, value: str) -> VideoLocation:
        """Decode a persisted location string.

        Args:
            value: String previously produced by ``encode``.

        Returns:
            The decoded location.

        Raises:
            MalformedLocationException: If the string does not split into
                exactly two non-empty parts.
        """
        parts = value.split(DELIMITER)
        if len(parts) != 2:
            raise MalformedLocationException(
                value, f"expected 2 parts, got {len(parts)}"
            )
        bucket, key = parts
        if not bucket or not key:
            raise MalformedLocationException(value, "empty bucket or key")
        return cls(bucket=bucket, key=key)

    def __str__(self) -> str:
        return self.encode()


def encode_location(bucket: str, key: str) -> str:
    """Encode a bucket/key pair into its persisted form."""
    return VideoLocation(bucket=bucket, key=key).encode()


def decode_location(value: str) -> tuple[str, str]:
    """Decode a persisted location into a ``(bucket, key)`` pair."""
    location = VideoLocation.decode(value)
    return location.bucket, location.key
