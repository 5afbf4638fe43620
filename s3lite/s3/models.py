from __future__ import annotations

from pydantic import BaseModel, ConfigDict, NonNegativeInt

__all__ = [
    "Bucket",
    "GetObjectResult",
    "ListBucketsResult",
    "ListObjectsResult",
    "ObjectSummary",
]


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)


class Bucket(_Result):
    name: str

    def __str__(self) -> str:
        return self.name


class ObjectSummary(_Result):
    key: str

    def __str__(self) -> str:
        return self.key


class ListBucketsResult(_Result):
    buckets: list[Bucket]


class ListObjectsResult(_Result):
    bucket_name: str
    prefix: str | None = None
    delimiter: str | None = None
    marker: str | None = None
    next_marker: str | None = None
    max_keys: NonNegativeInt
    truncated: bool
    object_summaries: list[ObjectSummary]
    common_prefixes: list[str] = []


class GetObjectResult(_Result):
    content: bytes
