"""Signed playback URLs for stored videos."""

from src.application.dtos.videos import VideoResponse
from src.commons.infrastructure.blob.base import BlobStorageBase
from src.commons.telemetry import get_logger
from src.domain.models.video import VideoRecord
from src.domain.value_objects.video_location import VideoLocation

DEFAULT_TTL_SECONDS = 3600


class PresignService:
    """Turns persisted video locations into short-lived signed URLs.

    URLs are minted on every read and never stored, so their expiry only
    affects URLs already handed out.
    """

    def __init__(
        self,
        blob_storage: BlobStorageBase,
        default_ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        """Initialize the presign service.

        Args:
            blob_storage: Object storage provider that signs URLs.
            default_ttl_seconds: URL lifetime when no TTL is given.
        """
        if default_ttl_seconds <= 0:
            raise ValueError(f"default_ttl_seconds must be positive, got {default_ttl_seconds}")
        self._blob = blob_storage
        self._default_ttl = default_ttl_seconds
        self._logger = get_logger(__name__)

    async def sign(
        self,
        encoded_location: str | None,
        ttl_seconds: int | None = None,
    ) -> str | None:
        """Mint a signed GET URL for an encoded location.

        Args:
            encoded_location: Value of ``VideoRecord.video_location``.
            ttl_seconds: URL lifetime. Defaults to the configured TTL.

        Returns:
            The signed URL, or None when there is no location.

        Raises:
            MalformedLocationException: If the location cannot be decoded.
            StorageException: If the store cannot sign the URL.
            ValueError: If the TTL is not positive.
        """
        if encoded_location is None:
            return None

        ttl = self._default_ttl if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl}")

        location = VideoLocation.decode(encoded_location)
        return await self._blob.generate_presigned_url(
            bucket=location.bucket,
            path=location.key,
            expiry_seconds=ttl,
        )

    async def sign_record(
        self,
        record: VideoRecord,
        ttl_seconds: int | None = None,
    ) -> VideoResponse:
        """Build the client view of a record with a fresh signed URL."""
        return VideoResponse(
            id=record.id,
            owner_id=record.owner_id,
            title=record.title,
            description=record.description,
            video_url=await self.sign(record.video_location, ttl_seconds),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
