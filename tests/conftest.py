"""Shared fixtures for unit tests."""

import pytest

from tests.fakes import FakeCommandRunner, InMemoryBlobStorage, InMemoryDocumentDB


@pytest.fixture
def command_runner():
    """Runner whose probe reports a single 1920x1080 video stream."""
    return FakeCommandRunner(
        streams=[{"index": 0, "codec_type": "video", "width": 1920, "height": 1080}]
    )


@pytest.fixture
def document_db():
    """Empty in-memory document database."""
    return InMemoryDocumentDB()


@pytest.fixture
def blob_storage():
    """Empty in-memory object store."""
    return InMemoryBlobStorage()


@pytest.fixture
def staging_root(tmp_path):
    """Private staging root so tests can assert it is left empty."""
    root = tmp_path / "staging"
    root.mkdir()
    return root
