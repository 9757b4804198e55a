"""Video management and upload endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Query, UploadFile, status

from src.api.dependencies import CurrentUserDep, UploadServiceDep, VideoServiceDep
from src.application.dtos.videos import (
    CreateVideoRequest,
    UploadVideoResponse,
    VideoListResponse,
    VideoResponse,
)
from src.domain.exceptions import InvalidVideoIdException

router = APIRouter()


def parse_video_id(value: str) -> UUID:
    """Parse a path parameter into a video UUID.

    Raises:
        InvalidVideoIdException: If the value is not a UUID.
    """
    try:
        return UUID(value)
    except ValueError as e:
        raise InvalidVideoIdException(value) from e


@router.post(
    "/videos",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create video",
    description="Create a draft video record owned by the caller.",
)
async def create_video(
    request: CreateVideoRequest,
    user_id: CurrentUserDep,
    service: VideoServiceDep,
) -> VideoResponse:
    """Create a draft video record."""
    return await service.create_video(user_id, request)


@router.get(
    "/videos",
    response_model=VideoListResponse,
    summary="List videos",
    description="List the caller's videos, newest first, with signed URLs.",
)
async def list_videos(
    user_id: CurrentUserDep,
    service: VideoServiceDep,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
) -> VideoListResponse:
    """List the caller's videos."""
    videos = await service.list_videos(
        user_id,
        skip=(page - 1) * page_size,
        limit=page_size,
    )
    return VideoListResponse(videos=videos, count=len(videos))


@router.get(
    "/videos/{video_id}",
    response_model=VideoResponse,
    summary="Get video",
    description="Get one of the caller's videos with a freshly signed URL.",
)
async def get_video(
    video_id: str,
    user_id: CurrentUserDep,
    service: VideoServiceDep,
) -> VideoResponse:
    """Get a single video."""
    return await service.get_video(parse_video_id(video_id), user_id)


@router.post(
    "/videos/{video_id}/upload",
    response_model=UploadVideoResponse,
    summary="Upload video",
    description=(
        "Upload an MP4 for an existing video record. The file is remuxed for "
        "fast start, classified by aspect ratio and stored; the response "
        "carries a signed playback URL."
    ),
)
async def upload_video(
    video_id: str,
    user_id: CurrentUserDep,
    service: UploadServiceDep,
    video: Annotated[UploadFile, File(description="MP4 video file")],
) -> UploadVideoResponse:
    """Upload and process a video for one of the caller's records."""
    vid = parse_video_id(video_id)
    try:
        return await service.upload_video(
            video_id=vid,
            user_id=user_id,
            stream=video.file,
            content_type=video.content_type,
        )
    finally:
        await video.close()
