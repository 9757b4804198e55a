"""In-memory and scripted fakes for infrastructure ports."""

import json
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Any, BinaryIO

from src.commons.infrastructure.blob.base import BlobMetadata, BlobStorageBase, HealthStatus
from src.commons.infrastructure.documentdb.base import DocumentDBBase
from src.domain.exceptions import StorageException
from src.infrastructure.process.base import CommandResult, CommandRunnerBase


class FakeCommandRunner(CommandRunnerBase):
    """Scripted stand-in for ffmpeg and ffprobe.

    The remux copies its input to the requested output path. The probe
    reports ``streams`` as ffprobe JSON. Either step can be told to fail.
    """

    def __init__(
        self,
        streams: list[dict[str, Any]] | None = None,
        remux_exit_code: int = 0,
        probe_exit_code: int = 0,
        probe_stdout: bytes | None = None,
    ) -> None:
        self.streams = streams if streams is not None else []
        self.remux_exit_code = remux_exit_code
        self.probe_exit_code = probe_exit_code
        self.probe_stdout = probe_stdout
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    async def run(self, command: str, args: Sequence[str]) -> CommandResult:
        self.calls.append((command, tuple(args)))
        if "ffprobe" in command:
            return self._probe(command, args)
        return self._remux(command, args)

    def _remux(self, command: str, args: Sequence[str]) -> CommandResult:
        if self.remux_exit_code != 0:
            return CommandResult(
                command=command,
                args=tuple(args),
                exit_code=self.remux_exit_code,
                stdout=b"",
                stderr=b"moov atom not found",
            )
        source = Path(args[args.index("-i") + 1])
        shutil.copyfile(source, Path(args[-1]))
        return CommandResult(command, tuple(args), 0, b"", b"")

    def _probe(self, command: str, args: Sequence[str]) -> CommandResult:
        if self.probe_exit_code != 0:
            return CommandResult(
                command, tuple(args), self.probe_exit_code, b"", b"Invalid data found"
            )
        stdout = self.probe_stdout
        if stdout is None:
            stdout = json.dumps({"streams": self.streams}).encode()
        return CommandResult(command, tuple(args), 0, stdout, b"")


class InMemoryDocumentDB(DocumentDBBase):
    """Dict-backed document database."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self.collections.setdefault(name, {})

    async def insert(self, collection: str, document: dict[str, Any]) -> str:
        self._collection(collection)[document["id"]] = dict(document)
        return document["id"]

    async def find_by_id(self, collection: str, document_id: str) -> dict[str, Any] | None:
        doc = self._collection(collection).get(document_id)
        return dict(doc) if doc is not None else None

    async def find(
        self,
        collection: str,
        filters: dict[str, Any],
        skip: int = 0,
        limit: int = 100,
        sort: list[tuple[str, int]] | None = None,
    ) -> list[dict[str, Any]]:
        docs = [
            dict(doc)
            for doc in self._collection(collection).values()
            if all(doc.get(k) == v for k, v in filters.items())
        ]
        for field, direction in reversed(sort or []):
            docs.sort(key=lambda d, f=field: d.get(f), reverse=direction < 0)
        return docs[skip : skip + limit]

    async def update(self, collection: str, document_id: str, updates: dict[str, Any]) -> bool:
        doc = self._collection(collection).get(document_id)
        if doc is None:
            return False
        doc.update(updates)
        return True

    async def health_check(self) -> HealthStatus:
        return HealthStatus(healthy=True, latency_ms=0.1, message="in-memory")


class InMemoryBlobStorage(BlobStorageBase):
    """Dict-backed object store that mints distinguishable fake signed URLs."""

    def __init__(self, fail_uploads: bool = False) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.content_types: dict[tuple[str, str], str] = {}
        self.buckets: set[str] = set()
        self.fail_uploads = fail_uploads
        self.signed: list[tuple[str, str, int]] = []

    async def upload(
        self,
        bucket: str,
        path: str,
        data: BinaryIO | bytes,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
    ) -> BlobMetadata:
        if self.fail_uploads:
            raise StorageException(bucket, path, "connection refused")
        payload = data if isinstance(data, bytes) else data.read()
        self.objects[(bucket, path)] = payload
        self.content_types[(bucket, path)] = content_type
        return BlobMetadata(
            bucket=bucket,
            path=path,
            size_bytes=len(payload),
            content_type=content_type,
            etag="etag",
        )

    async def generate_presigned_url(
        self,
        bucket: str,
        path: str,
        expiry_seconds: int = 3600,
    ) -> str:
        self.signed.append((bucket, path, expiry_seconds))
        return f"https://storage.test/{bucket}/{path}?X-Amz-Expires={expiry_seconds}"

    async def delete(self, bucket: str, path: str) -> None:
        self.objects.pop((bucket, path), None)

    async def create_bucket(self, bucket: str) -> bool:
        if bucket in self.buckets:
            return False
        self.buckets.add(bucket)
        return True

    async def health_check(self) -> HealthStatus:
        return HealthStatus(healthy=True, latency_ms=0.1, message="in-memory")


