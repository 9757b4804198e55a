"""Domain value objects."""

from src.domain.value_objects.object_key import (
    ObjectKey,
    derive_object_key,
    generate_object_id,
    media_subtype,
    parse_media_type,
)
from src.domain.value_objects.video_geometry import (
    AspectClass,
    VideoGeometry,
    classify_ratio,
)
from src.domain.value_objects.video_location import (
    VideoLocation,
    decode_location,
    encode_location,
)

__all__ = [
    # Geometry
    "AspectClass",
    "VideoGeometry",
    "classify_ratio",
    # Keys
    "ObjectKey",
    "derive_object_key",
    "generate_object_id",
    "media_subtype",
    "parse_media_type",
    # Location
    "VideoLocation",
    "decode_location",
    "encode_location",
]
