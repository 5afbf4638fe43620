from .connection import S3Connection
from .models import (
    Bucket,
    GetObjectResult,
    ListBucketsResult,
    ListObjectsResult,
    ObjectSummary,
)
from .operations import GetObjectRequest, ListBucketsRequest, ListObjectsRequest
from .request import HttpMethod, RawResponse, RequestDescriptor, RequestDispatcher

__all__ = [
    "Bucket",
    "GetObjectRequest",
    "GetObjectResult",
    "HttpMethod",
    "ListBucketsRequest",
    "ListBucketsResult",
    "ListObjectsRequest",
    "ListObjectsResult",
    "ObjectSummary",
    "RawResponse",
    "RequestDescriptor",
    "RequestDispatcher",
    "S3Connection",
]
