"""Unit tests for domain value objects."""

import pytest
from pydantic import ValidationError

from src.domain.exceptions import MalformedLocationException, ValidationException
from src.domain.value_objects import (
    AspectClass,
    ObjectKey,
    VideoGeometry,
    VideoLocation,
    classify_ratio,
    decode_location,
    derive_object_key,
    encode_location,
    generate_object_id,
    media_subtype,
    parse_media_type,
)

URL_SAFE = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")


class TestClassifyRatio:
    """Tests for aspect ratio classification."""

    @pytest.mark.parametrize(
        ("width", "height", "expected"),
        [
            (1920, 1080, AspectClass.LANDSCAPE),
            (1280, 720, AspectClass.LANDSCAPE),
            (1080, 1920, AspectClass.PORTRAIT),
            (720, 1280, AspectClass.PORTRAIT),
            (640, 640, AspectClass.OTHER),
            (640, 480, AspectClass.OTHER),
            (2560, 1080, AspectClass.OTHER),
        ],
    )
    def test_common_resolutions(self, width, height, expected):
        assert VideoGeometry(width=width, height=height).classify() == expected

    def test_band_edges_are_inclusive(self):
        assert classify_ratio(1.76) == AspectClass.LANDSCAPE
        assert classify_ratio(1.78) == AspectClass.LANDSCAPE
        assert classify_ratio(0.55) == AspectClass.PORTRAIT
        assert classify_ratio(0.57) == AspectClass.PORTRAIT

    def test_just_outside_bands(self):
        assert classify_ratio(1.781) == AspectClass.OTHER
        assert classify_ratio(1.759) == AspectClass.OTHER
        assert classify_ratio(0.549) == AspectClass.OTHER
        assert classify_ratio(0.571) == AspectClass.OTHER

    def test_geometry_at_landscape_edges(self):
        """Test widths of 1.76*h and 1.781*h land on either side of the band."""
        assert VideoGeometry(width=1760, height=1000).classify() == AspectClass.LANDSCAPE
        assert VideoGeometry(width=1781, height=1000).classify() == AspectClass.OTHER


class TestVideoGeometry:
    """Tests for VideoGeometry value object."""

    def test_unknown(self):
        geometry = VideoGeometry.unknown()
        assert geometry.known is False
        assert geometry.ratio is None
        assert geometry.classify() == AspectClass.OTHER

    def test_zero_height_is_unknown(self):
        geometry = VideoGeometry(width=1920, height=0)
        assert geometry.known is False
        assert geometry.classify() == AspectClass.OTHER

    def test_ratio(self):
        assert VideoGeometry(width=200, height=100).ratio == 2.0

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            VideoGeometry(width=-1, height=10)

    def test_is_frozen(self):
        geometry = VideoGeometry(width=1, height=1)
        with pytest.raises(ValidationError):
            geometry.width = 2  # type: ignore[misc]


class TestVideoLocation:
    """Tests for the bucket/key location codec."""

    def test_encode(self):
        location = VideoLocation(bucket="tubely-videos", key="landscape/abc.mp4")
        assert location.encode() == "tubely-videos,landscape/abc.mp4"
        assert str(location) == "tubely-videos,landscape/abc.mp4"

    def test_decode(self):
        location = VideoLocation.decode("tubely-videos,portrait/x_y-z.mp4")
        assert location.bucket == "tubely-videos"
        assert location.key == "portrait/x_y-z.mp4"

    def test_round_trip(self):
        assert decode_location(encode_location("b", "other/k.mp4")) == ("b", "other/k.mp4")

    @pytest.mark.parametrize("value", ["no-comma-here", "a,b,c", ",key", "bucket,", ","])
    def test_decode_malformed(self, value):
        with pytest.raises(MalformedLocationException):
            VideoLocation.decode(value)

    @pytest.mark.parametrize(("bucket", "key"), [("a,b", "k"), ("b", "k,1"), ("", "k")])
    def test_invalid_parts_rejected(self, bucket, key):
        with pytest.raises(ValidationError):
            VideoLocation(bucket=bucket, key=key)


class TestMediaType:
    """Tests for media type parsing."""

    def test_plain(self):
        assert parse_media_type("video/mp4") == "video/mp4"

    def test_parameters_and_case_are_normalised(self):
        assert parse_media_type("Video/MP4; codecs=avc1") == "video/mp4"

    @pytest.mark.parametrize("header", [None, "", "mp4", "video/", "video mp4"])
    def test_malformed(self, header):
        with pytest.raises(ValidationException):
            parse_media_type(header)

    def test_subtype(self):
        assert media_subtype("video/mp4") == "mp4"
        assert media_subtype("video/quicktime") == "quicktime"


class TestObjectKey:
    """Tests for object key derivation."""

    def test_object_id_is_url_safe_without_padding(self):
        object_id = generate_object_id()
        assert len(object_id) == 43
        assert set(object_id) <= URL_SAFE

    def test_object_ids_are_distinct(self):
        ids = {generate_object_id() for _ in range(200)}
        assert len(ids) == 200

    def test_injected_token_source(self):
        object_id = generate_object_id(lambda n: b"\xff" * n)
        assert object_id == "_" * 42 + "8"

    def test_derive_key_layout(self):
        key = derive_object_key(AspectClass.PORTRAIT, "video/mp4", lambda n: b"\x00" * n)
        assert key.value == f"portrait/{'A' * 43}.mp4"
        assert str(key) == key.value

    def test_derived_keys_differ(self):
        first = derive_object_key(AspectClass.OTHER, "video/mp4")
        second = derive_object_key(AspectClass.OTHER, "video/mp4")
        assert first.value != second.value

    def test_key_fits_location_codec(self):
        key = derive_object_key(AspectClass.LANDSCAPE, "video/mp4")
        location = VideoLocation.decode(encode_location("bucket", key.value))
        assert location.key == key.value

    def test_object_id_pattern_enforced(self):
        with pytest.raises(ValidationError):
            ObjectKey(aspect_class=AspectClass.OTHER, object_id="has/slash", extension="mp4")
