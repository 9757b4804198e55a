"""Video upload orchestration service."""

import secrets
from collections.abc import Callable
from typing import BinaryIO
from uuid import UUID

from src.application.dtos.videos import UploadStep, UploadVideoResponse
from src.application.services.presign import PresignService
from src.application.services.records import VideoRecordStore
from src.commons.infrastructure.blob.base import BlobStorageBase
from src.commons.telemetry import LogContext, get_logger, timed
from src.domain.exceptions import (
    NotVideoOwnerException,
    StorageException,
    UnsupportedMediaTypeException,
)
from src.domain.models.video import VideoRecord
from src.domain.value_objects.object_key import (
    derive_object_key,
    media_subtype,
    parse_media_type,
)
from src.domain.value_objects.video_location import DELIMITER, VideoLocation
from src.infrastructure.staging.local_staging import LocalStagingStore
from src.infrastructure.video.base import MediaProcessorBase, ProcessedVideo


class VideoUploadService:
    """Runs the ingestion pipeline for one uploaded video.

    Pipeline steps:
    1. Validate the declared media type
    2. Load the record and check the caller owns it
    3. Stage the upload to local disk
    4. Remux for fast start and probe geometry
    5. Derive a fresh object key from the aspect class
    6. Upload the processed file to object storage
    7. Persist the encoded location on the record
    8. Return the record with a freshly signed URL

    The record is only written after the upload succeeded, so a failed run
    never leaves a dangling location behind. If that write fails, the new
    object is deleted again. Staged files are removed on every exit path.
    """

    def __init__(
        self,
        staging_store: LocalStagingStore,
        media_processor: MediaProcessorBase,
        blob_storage: BlobStorageBase,
        record_store: VideoRecordStore,
        presign_service: PresignService,
        bucket: str,
        allowed_media_types: list[str] | None = None,
        token_source: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        """Initialize the upload service.

        Args:
            staging_store: Local staging for the raw upload.
            media_processor: Remux and probe implementation.
            blob_storage: Durable object storage.
            record_store: Video record persistence.
            presign_service: Signs URLs for the response.
            bucket: Bucket every video is stored in.
            allowed_media_types: Accepted upload types. Defaults to MP4 only.
            token_source: Random byte source for object keys.

        Raises:
            ValueError: If ``bucket`` cannot be encoded into a location.
        """
        if not bucket or DELIMITER in bucket:
            msg = f"Bucket name must be non-empty and must not contain '{DELIMITER}': '{bucket}'"
            raise ValueError(msg)
        self._staging = staging_store
        self._processor = media_processor
        self._blob = blob_storage
        self._records = record_store
        self._presign = presign_service
        self._bucket = bucket
        self._allowed = allowed_media_types or ["video/mp4"]
        self._token_source = token_source
        self._logger = get_logger(__name__)

    @timed
    async def upload_video(
        self,
        video_id: UUID,
        user_id: UUID,
        stream: BinaryIO,
        content_type: str | None,
    ) -> UploadVideoResponse:
        """Ingest an uploaded video and attach it to its record.

        Args:
            video_id: Record the upload belongs to.
            user_id: Authenticated caller.
            stream: Uploaded bytes.
            content_type: Declared media type of the upload.

        Returns:
            The updated record with a signed playback URL.

        Raises:
            ValidationException: Unsupported or malformed media type.
            VideoNotFoundException: No record with this ID.
            NotVideoOwnerException: Caller does not own the record.
            StagingException: The upload could not be staged.
            MediaProcessingException: Remux or probe failed.
            StorageException: Upload or signing failed.
        """
        with LogContext(video_id=str(video_id), user_id=str(user_id)):
            media_type = self._validate_media_type(content_type)
            record = await self._authorize(video_id, user_id)

            self._logger.info(
                "Uploading video",
                extra={"step": UploadStep.STAGING.value, "media_type": media_type},
            )
            async with self._staging.stage(
                stream, suffix=f".{media_subtype(media_type)}"
            ) as staged:
                processed = await self._processor.process_for_streaming(staged.path)
                location = await self._store(processed, media_type)

            try:
                updated = await self._records.update_record(record.with_location(location))
            except Exception:
                await self._discard(location)
                raise
            self._logger.info(
                "Video uploaded",
                extra={
                    "step": UploadStep.PERSISTING.value,
                    "key": location.key,
                    "aspect_class": processed.aspect_class.value,
                },
            )

            signed = await self._presign.sign_record(updated)
            return UploadVideoResponse(
                **signed.model_dump(),
                aspect_class=processed.aspect_class,
                width=processed.width,
                height=processed.height,
                geometry_known=processed.geometry.known,
            )

    def _validate_media_type(self, content_type: str | None) -> str:
        media_type = parse_media_type(content_type)
        if media_type not in self._allowed:
            raise UnsupportedMediaTypeException(media_type, self._allowed)
        return media_type

    async def _authorize(self, video_id: UUID, user_id: UUID) -> VideoRecord:
        record = await self._records.get_record(video_id)
        if not record.is_owned_by(user_id):
            raise NotVideoOwnerException(str(video_id), str(user_id))
        return record

    async def _store(self, processed: ProcessedVideo, media_type: str) -> VideoLocation:
        key = derive_object_key(processed.aspect_class, media_type, self._token_source)

        self._logger.debug(
            "Uploading processed video",
            extra={
                "step": UploadStep.UPLOADING.value,
                "bucket": self._bucket,
                "key": key.value,
            },
        )
        with processed.processed_path.open("rb") as f:
            await self._blob.upload(
                bucket=self._bucket,
                path=key.value,
                data=f,
                content_type=media_type,
            )

        return VideoLocation(bucket=self._bucket, key=key.value)

    async def _discard(self, location: VideoLocation) -> None:
        """Remove an object whose location never reached the record."""
        try:
            await self._blob.delete(location.bucket, location.key)
        except StorageException:
            self._logger.exception(
                "Failed to remove orphaned object",
                extra={"bucket": location.bucket, "key": location.key},
            )
