from __future__ import annotations

import abc
from contextlib import ExitStack
from typing import TYPE_CHECKING, NamedTuple, Protocol, Self

import httpx

from s3lite.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "HttpxTransport",
    "ITransport",
    "TransportResponse",
]


class TransportResponse(NamedTuple):
    status_code: int
    body: bytes


class ITransport(Protocol):
    @abc.abstractmethod
    def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        """
        Sends a request and returns response status code and body.

        Raises:
            TransportError: If request can't be completed.
        """
        raise NotImplementedError()  # pragma: no cover

    @abc.abstractmethod
    def close(self) -> None:
        raise NotImplementedError()  # pragma: no cover


class HttpxTransport:
    __slots__ = ("client", "_stack")

    def __init__(
        self,
        timeout: float = 10.0,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self.client = httpx.Client(timeout=timeout, transport=transport)
        self._stack = ExitStack()
        self._stack.enter_context(self.client)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._stack.close()

    def execute(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
    ) -> TransportResponse:
        request = self.client.build_request(
            method,
            url,
            headers=dict(headers),
            content=body or None,
        )
        try:
            response = self.client.send(request, stream=True)
            try:
                # raw bytes, Content-Encoding is part of the stored object
                content = b"".join(response.iter_raw())
            finally:
                response.close()
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        return TransportResponse(status_code=response.status_code, body=content)
