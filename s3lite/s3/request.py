from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from s3lite.contrib.aws_v4_auth import AWSv4Auth, canonical_query_string
from s3lite.errors import HttpStatusError, TransportError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from s3lite.credentials import Credentials
    from s3lite.infrastructure.transport import ITransport

__all__ = [
    "HttpMethod",
    "RawResponse",
    "RequestDescriptor",
    "RequestDispatcher",
    "SignedRequest",
]

logger = logging.getLogger(__name__)


class HttpMethod(str, enum.Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    method: HttpMethod
    host: str
    path: str
    query: tuple[tuple[str, str], ...] = ()
    body: bytes = b""
    region: str = "us-east-1"
    scheme: str = "https"

    @property
    def url(self) -> str:
        url = f"{self.scheme}://{self.host}{self.path}"
        if query := canonical_query_string(self.query):
            url = f"{url}?{query}"
        return url


@dataclass(frozen=True, slots=True)
class SignedRequest:
    request: RequestDescriptor
    headers: Mapping[str, str]

    def __repr__(self) -> str:
        lines = [f"{self.request.method.value} {self.request.path} HTTP/1.1"]
        for key, value in self.headers.items():
            if key == "Authorization":
                value = value.rsplit("Signature=", 1)[0] + "Signature=REDACTED"
            lines.append(f"{key}: {value}")
        lines.append("")
        lines.append("BODY REDACTED...")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class RawResponse:
    status_code: int
    body: bytes


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RequestDispatcher:
    """Signs request descriptors and executes them with a given transport."""

    __slots__ = ("transport", "clock")

    def __init__(
        self,
        transport: ITransport,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.transport = transport
        self.clock = clock

    def sign(
        self, request: RequestDescriptor, credentials: Credentials
    ) -> SignedRequest:
        auth = AWSv4Auth(
            aws_secret_key=credentials.secret_key,
            aws_access_key=credentials.access_key_id,
            region=request.region,
        )
        headers = auth.auth_headers(
            request.method.value,
            request.host,
            request.path,
            request.query,
            data=request.body,
            dt=self.clock(),
        )
        return SignedRequest(request=request, headers=headers)

    def execute(
        self, request: RequestDescriptor, credentials: Credentials
    ) -> RawResponse:
        """
        Signs and sends the request. Only HTTP 200 is treated as a success.

        Raises:
            TransportError: If the transport fails to complete the request.
            HttpStatusError: If the service responds with any other status code.
        """
        signed = self.sign(request, credentials)
        logger.debug("Sending request:\n%r", signed)
        try:
            response = self.transport.execute(
                request.method.value,
                request.url,
                signed.headers,
                request.body,
            )
        except TransportError:
            logger.warning(
                "Request failed: %s %s", request.method.value, request.url
            )
            raise

        logger.debug(
            "Received response: %s %s -> %d",
            request.method.value,
            request.url,
            response.status_code,
        )
        if response.status_code != 200:
            logger.warning(
                "Unexpected status code %d for %s %s",
                response.status_code,
                request.method.value,
                request.url,
            )
            raise HttpStatusError(response.status_code)

        return RawResponse(status_code=response.status_code, body=response.body)
