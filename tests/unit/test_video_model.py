"""Unit tests for the VideoRecord model."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from src.domain.models.video import VideoRecord
from src.domain.value_objects import VideoLocation


class TestVideoRecord:
    """Tests for VideoRecord model."""

    def test_defaults(self):
        owner = uuid4()
        record = VideoRecord(owner_id=owner, title="Boots")

        assert isinstance(record.id, UUID)
        assert record.owner_id == owner
        assert record.description == ""
        assert record.video_location is None
        assert record.has_video is False
        assert record.created_at.tzinfo is not None

    def test_ids_are_unique(self):
        owner = uuid4()
        assert VideoRecord(owner_id=owner).id != VideoRecord(owner_id=owner).id

    def test_owner_required(self):
        with pytest.raises(ValidationError):
            VideoRecord(title="orphan")  # type: ignore[call-arg]

    def test_title_length_limit(self):
        with pytest.raises(ValidationError):
            VideoRecord(owner_id=uuid4(), title="x" * 201)

    def test_is_owned_by(self):
        owner = uuid4()
        record = VideoRecord(owner_id=owner)
        assert record.is_owned_by(owner) is True
        assert record.is_owned_by(uuid4()) is False


class TestWithLocation:
    """Tests for VideoRecord.with_location."""

    def test_sets_encoded_location(self):
        record = VideoRecord(owner_id=uuid4(), title="Boots")

        updated = record.with_location(VideoLocation(bucket="b", key="landscape/k.mp4"))

        assert updated.video_location == "b,landscape/k.mp4"
        assert updated.has_video is True
        assert updated.id == record.id
        assert updated.title == "Boots"

    def test_does_not_mutate_original(self):
        record = VideoRecord(owner_id=uuid4())
        record.with_location(VideoLocation(bucket="b", key="k.mp4"))
        assert record.video_location is None

    def test_refreshes_updated_at(self):
        old = datetime(2020, 1, 1, tzinfo=UTC)
        record = VideoRecord(owner_id=uuid4(), created_at=old, updated_at=old)

        updated = record.with_location(VideoLocation(bucket="b", key="k.mp4"))

        assert updated.created_at == old
        assert updated.updated_at > old

    def test_replaces_previous_location(self):
        record = VideoRecord(owner_id=uuid4()).with_location(
            VideoLocation(bucket="b", key="old.mp4")
        )
        updated = record.with_location(VideoLocation(bucket="b", key="new.mp4"))
        assert updated.video_location == "b,new.mp4"

    def test_json_round_trip(self):
        record = VideoRecord(owner_id=uuid4(), title="t").with_location(
            VideoLocation(bucket="b", key="k.mp4")
        )
        restored = VideoRecord.model_validate(record.model_dump(mode="json"))
        assert restored == record
