from __future__ import annotations

import abc
import re
from typing import TYPE_CHECKING, Protocol, TypeVar

from s3lite.errors import (
    FieldInvalidError,
    InvalidEncodingError,
    RequiredFieldMissingError,
)
from s3lite.infrastructure.xml import parse_xml

from .models import (
    Bucket,
    GetObjectResult,
    ListBucketsResult,
    ListObjectsResult,
    ObjectSummary,
)

if TYPE_CHECKING:
    from s3lite.infrastructure.xml import Node

    from .request import RawResponse

__all__ = [
    "IUnmarshaller",
    "GetObjectUnmarshaller",
    "ListBucketsUnmarshaller",
    "ListObjectsUnmarshaller",
    "xmlns",
]

T_co = TypeVar("T_co", covariant=True)

xmlns = "http://s3.amazonaws.com/doc/2006-03-01/"

_UINT_RE = re.compile(r"[0-9]+")


class IUnmarshaller(Protocol[T_co]):
    @abc.abstractmethod
    def unmarshal(self, response: RawResponse) -> T_co:
        """
        Converts raw response into a typed result.

        Raises:
            UnmarshalError: If response body can't be converted.
        """
        raise NotImplementedError()  # pragma: no cover


def xml_body(response: RawResponse) -> Node:
    """Decodes response body as UTF-8 and parses it as XML."""
    try:
        text = response.body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncodingError() from exc
    return parse_xml(text)


def _required(node: Node, name: str) -> Node:
    child = node.child(name, xmlns)
    if child is None:
        raise RequiredFieldMissingError(name)
    return child


def _optional_text(node: Node, name: str) -> str | None:
    if (child := node.child(name, xmlns)) is not None:
        return child.text
    return None


def _uint(node: Node, name: str) -> int:
    child = node.child(name, xmlns)
    if child is None or not _UINT_RE.fullmatch(text := child.text.strip()):
        raise FieldInvalidError(name)
    return int(text)


def _bool(node: Node, name: str) -> bool:
    child = node.child(name, xmlns)
    if child is None:
        raise FieldInvalidError(name)
    match child.text.strip():
        case "true":
            return True
        case "false":
            return False
        case _:
            raise FieldInvalidError(name)


def _object_summary(node: Node) -> ObjectSummary:
    return ObjectSummary(key=_required(node, "Key").text)


class ListBucketsUnmarshaller:
    """
    Parses ListAllMyBucketsResult.

    https://docs.aws.amazon.com/AmazonS3/latest/API/API_ListBuckets.html
    """

    __slots__ = ()

    def unmarshal(self, response: RawResponse) -> ListBucketsResult:
        root = xml_body(response)
        buckets = _required(root, "Buckets")
        return ListBucketsResult(
            buckets=[
                Bucket(name=_required(bucket, "Name").text)
                for bucket in buckets.children("Bucket", xmlns)
            ]
        )


class ListObjectsUnmarshaller:
    """
    Parses ListBucketResult. Any invalid `Contents` entry fails the whole result.

    https://docs.aws.amazon.com/AmazonS3/latest/API/API_ListObjects.html
    """

    __slots__ = ()

    def unmarshal(self, response: RawResponse) -> ListObjectsResult:
        root = xml_body(response)
        return ListObjectsResult(
            bucket_name=_required(root, "Name").text,
            prefix=_optional_text(root, "Prefix"),
            delimiter=_optional_text(root, "Delimiter"),
            marker=_optional_text(root, "Marker"),
            next_marker=_optional_text(root, "NextMarker"),
            max_keys=_uint(root, "MaxKeys"),
            truncated=_bool(root, "IsTruncated"),
            object_summaries=[
                _object_summary(c) for c in root.children("Contents", xmlns)
            ],
            common_prefixes=[
                p.text
                for c in root.children("CommonPrefixes", xmlns)
                for p in c.children("Prefix", xmlns)
            ],
        )


class GetObjectUnmarshaller:
    __slots__ = ()

    def unmarshal(self, response: RawResponse) -> GetObjectResult:
        return GetObjectResult(content=response.body)
