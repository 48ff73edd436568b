"""Shared fixtures: an in-memory stand-in for the boto3 S3 client."""

from __future__ import annotations

import hashlib
import threading
from typing import Any

import pytest
from botocore.exceptions import ClientError


def client_error(code: str, operation: str = "PutObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Client:
    """Implements the list_objects / put_object / delete_object subset of S3."""

    def __init__(self, page_size: int = 1000) -> None:
        self.page_size = page_size
        self.objects: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str | None]] = []
        self.failures: dict[tuple[str, str | None], Exception] = {}
        self._lock = threading.Lock()

    def seed(self, key: str, body: bytes = b"", etag: str | None = None) -> None:
        if etag is None:
            etag = '"%s"' % hashlib.md5(body).hexdigest()
        self.objects[key] = {"Body": body, "ETag": etag, "ContentType": None, "ACL": None}

    def fail(self, operation: str, key: str | None, error: Exception) -> None:
        self.failures[(operation, key)] = error

    def _record(self, operation: str, key: str | None) -> None:
        with self._lock:
            self.calls.append((operation, key))
        error = self.failures.get((operation, key))
        if error is not None:
            raise error

    def list_objects(self, Bucket: str, Marker: str | None = None) -> dict[str, Any]:
        self._record("list_objects", Marker)
        keys = sorted(k for k in self.objects if Marker is None or k > Marker)
        page = keys[: self.page_size]
        return {
            "Name": Bucket,
            "IsTruncated": len(keys) > len(page),
            "Contents": [
                {
                    "Key": k,
                    "ETag": self.objects[k]["ETag"],
                    "Size": len(self.objects[k]["Body"]),
                }
                for k in page
            ],
        }

    def get_paginator(self, operation_name: str) -> "FakePaginator":
        assert operation_name == "list_objects"
        return FakePaginator(self)

    def put_object(self, Bucket: str, ACL: str, ContentType: str, Key: str, Body: bytes) -> dict:
        self._record("put_object", Key)
        etag = '"%s"' % hashlib.md5(Body).hexdigest()
        with self._lock:
            self.objects[Key] = {"Body": Body, "ETag": etag, "ContentType": ContentType, "ACL": ACL}
        return {"ETag": etag}

    def delete_object(self, Bucket: str, Key: str) -> dict:
        self._record("delete_object", Key)
        with self._lock:
            self.objects.pop(Key, None)
        return {}

    def operations(self, name: str) -> list[str | None]:
        return [key for op, key in self.calls if op == name]


class FakePaginator:
    """Mirrors botocore's list_objects paginator: the next Marker is the last key."""

    def __init__(self, client: FakeS3Client) -> None:
        self.client = client

    def paginate(self, Bucket: str):
        marker = None
        while True:
            page = self.client.list_objects(Bucket=Bucket, Marker=marker)
            yield page
            if not page["IsTruncated"] or not page["Contents"]:
                return
            marker = page["Contents"][-1]["Key"]


@pytest.fixture
def s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def make_tree(tmp_path):
    """Write a {relative_path: bytes} mapping under tmp_path/dist."""

    def _make(files: dict[str, bytes]):
        root = tmp_path / "dist"
        root.mkdir(exist_ok=True)
        for rel, body in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(body)
        return root

    return _make
