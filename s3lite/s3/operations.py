from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol, TypeVar

from s3lite.contrib.aws_v4_auth import uri_encode

from .models import GetObjectResult, ListBucketsResult, ListObjectsResult
from .request import HttpMethod, RequestDescriptor
from .responses import (
    GetObjectUnmarshaller,
    IUnmarshaller,
    ListBucketsUnmarshaller,
    ListObjectsUnmarshaller,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from s3lite.config import S3Config

__all__ = [
    "IOperation",
    "GetObjectRequest",
    "ListBucketsRequest",
    "ListObjectsRequest",
]

T = TypeVar("T")


class IOperation(Protocol[T]):
    unmarshaller: ClassVar[IUnmarshaller]

    @abc.abstractmethod
    def to_request(self, config: S3Config) -> RequestDescriptor:
        raise NotImplementedError()  # pragma: no cover


def _path_segment(segment: str) -> str:
    # dot segments would be collapsed by the HTTP client and no longer match the
    # signed path
    if segment in (".", ".."):
        return segment.replace(".", "%2E")
    return uri_encode(segment)


def _get(
    config: S3Config, path: str, query: Iterable[tuple[str, str]] = ()
) -> RequestDescriptor:
    return RequestDescriptor(
        method=HttpMethod.GET,
        host=config.endpoint,
        path=path,
        query=tuple(query),
        region=config.region,
        scheme=config.scheme,
    )


@dataclass(frozen=True, slots=True)
class ListBucketsRequest:
    """
    https://docs.aws.amazon.com/AmazonS3/latest/API/API_ListBuckets.html
    """

    unmarshaller: ClassVar[IUnmarshaller[ListBucketsResult]] = (
        ListBucketsUnmarshaller()
    )

    def to_request(self, config: S3Config) -> RequestDescriptor:
        return _get(config, "/")


@dataclass(frozen=True, slots=True)
class ListObjectsRequest:
    """
    https://docs.aws.amazon.com/AmazonS3/latest/API/API_ListObjects.html
    """

    unmarshaller: ClassVar[IUnmarshaller[ListObjectsResult]] = (
        ListObjectsUnmarshaller()
    )

    bucket_name: str
    prefix: str | None = None
    marker: str | None = None
    delimiter: str | None = None
    max_keys: int | None = None

    def to_request(self, config: S3Config) -> RequestDescriptor:
        params = (
            ("delimiter", self.delimiter),
            ("marker", self.marker),
            ("max-keys", str(self.max_keys) if self.max_keys is not None else None),
            ("prefix", self.prefix),
        )
        query = [(k, v) for k, v in params if v is not None]
        return _get(config, f"/{_path_segment(self.bucket_name)}", query)


@dataclass(frozen=True, slots=True)
class GetObjectRequest:
    """
    https://docs.aws.amazon.com/AmazonS3/latest/API/API_GetObject.html
    """

    unmarshaller: ClassVar[IUnmarshaller[GetObjectResult]] = GetObjectUnmarshaller()

    bucket_name: str
    key: str

    def to_request(self, config: S3Config) -> RequestDescriptor:
        bucket = _path_segment(self.bucket_name)
        key = "/".join(_path_segment(s) for s in self.key.split("/"))
        return _get(config, f"/{bucket}/{key}")
