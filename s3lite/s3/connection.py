from __future__ import annotations

from contextlib import ExitStack
from typing import TYPE_CHECKING, Self, TypeVar

from s3lite.config import S3Config
from s3lite.credentials import EnvironmentCredentialsProvider
from s3lite.infrastructure.transport import HttpxTransport

from .operations import GetObjectRequest, ListBucketsRequest, ListObjectsRequest
from .request import RequestDispatcher

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from s3lite.credentials import ICredentialsProvider
    from s3lite.infrastructure.transport import ITransport

    from .models import GetObjectResult, ListBucketsResult, ListObjectsResult
    from .operations import IOperation

__all__ = [
    "S3Connection",
]

T = TypeVar("T")


class S3Connection:
    __slots__ = ("config", "credentials_provider", "dispatcher", "_stack")

    def __init__(
        self,
        credentials_provider: ICredentialsProvider | None = None,
        config: S3Config | None = None,
        *,
        transport: ITransport | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.config = config or S3Config()
        self.credentials_provider = (
            credentials_provider or EnvironmentCredentialsProvider()
        )
        self._stack = ExitStack()
        if transport is None:
            transport = HttpxTransport(timeout=self.config.timeout)
            self._stack.callback(transport.close)
        if clock is None:
            self.dispatcher = RequestDispatcher(transport)
        else:
            self.dispatcher = RequestDispatcher(transport, clock=clock)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._stack.close()

    def _execute(self, operation: IOperation[T]) -> T:
        credentials = self.credentials_provider.get_credentials()
        request = operation.to_request(self.config)
        response = self.dispatcher.execute(request, credentials)
        return operation.unmarshaller.unmarshal(response)

    def list_buckets(self) -> ListBucketsResult:
        return self._execute(ListBucketsRequest())

    def list_objects(
        self,
        bucket_name: str,
        prefix: str | None = None,
        marker: str | None = None,
        delimiter: str | None = None,
        max_keys: int | None = None,
    ) -> ListObjectsResult:
        """
        Returns a single page of objects in a bucket.

        Use `next_marker` (or the last key, when delimiter is not set) of a
        truncated result as `marker` to fetch the next page.
        """
        operation = ListObjectsRequest(
            bucket_name=bucket_name,
            prefix=prefix,
            marker=marker,
            delimiter=delimiter,
            max_keys=max_keys,
        )
        return self._execute(operation)

    def get_object(self, bucket_name: str, key: str) -> GetObjectResult:
        return self._execute(GetObjectRequest(bucket_name=bucket_name, key=key))
