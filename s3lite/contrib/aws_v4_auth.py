# The MIT License (MIT)

# Copyright (c) 2020 to present Samuel Colvin

# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:

# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.

# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from __future__ import annotations

import hashlib
import hmac
from binascii import hexlify
from functools import reduce
from typing import TYPE_CHECKING
from urllib.parse import quote as url_quote

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

__all__ = [
    "AWSv4Auth",
    "SIGNED_HEADERS",
    "canonical_query_string",
    "canonical_request",
    "credential_scope",
    "derive_signing_key",
    "hmac_sha256",
    "sha256_hexdigest",
    "sign",
    "string_to_sign",
    "uri_encode",
]

_AWS_AUTH_REQUEST = "aws4_request"
_AUTH_ALGORITHM = "AWS4-HMAC-SHA256"

# WARNING! order is important here, headers need to be in alphabetical order
SIGNED_HEADERS = ("host", "x-amz-content-sha256", "x-amz-date")


def sha256_hexdigest(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def hmac_sha256(key: bytes, msg: str | bytes) -> bytes:
    if isinstance(msg, str):
        msg = msg.encode()
    return hmac.new(key, msg, hashlib.sha256).digest()


def uri_encode(value: str, *, encode_slash: bool = True) -> str:
    """
    Percent-encode everything except unreserved characters (A-Z, a-z, 0-9, '-',
    '.', '_', '~'). Forward slash is kept only when `encode_slash` is False.
    """
    return url_quote(value, safe="" if encode_slash else "/")


def canonical_query_string(query: Iterable[tuple[str, str]]) -> str:
    """
    Returns query pairs URI-encoded, sorted by key and joined with '&'.

    Pairs without a value still render as `key=`.
    """
    pairs = sorted(
        ((uri_encode(key), uri_encode(value or "")) for key, value in query),
        key=lambda pair: pair[0],
    )
    return "&".join(f"{key}={value}" for key, value in pairs)


def canonical_request(
    method: str,
    path: str,
    query: Iterable[tuple[str, str]],
    host: str,
    payload_hash: str,
    amz_date: str,
) -> str:
    headers = dict(
        zip(SIGNED_HEADERS, (host, payload_hash, amz_date), strict=True)
    )
    canonical_request_parts = (
        method,
        path,
        canonical_query_string(query),
        "".join(f"{k}:{headers[k]}\n" for k in SIGNED_HEADERS),
        ";".join(SIGNED_HEADERS),
        payload_hash,
    )
    return "\n".join(canonical_request_parts)


def credential_scope(date_stamp: str, region: str, service: str = "s3") -> str:
    return f"{date_stamp}/{region}/{service}/{_AWS_AUTH_REQUEST}"


def string_to_sign(amz_date: str, scope: str, canonical_request: str) -> str:
    string_to_sign_parts = (
        _AUTH_ALGORITHM,
        amz_date,
        scope,
        sha256_hexdigest(canonical_request.encode()),
    )
    return "\n".join(string_to_sign_parts)


def derive_signing_key(
    secret_key: str, date_stamp: str, region: str, service: str = "s3"
) -> bytes:
    key_parts = (
        b"AWS4" + secret_key.encode(),
        date_stamp,
        region,
        service,
        _AWS_AUTH_REQUEST,
    )
    return reduce(hmac_sha256, key_parts)  # type: ignore[arg-type, return-value]


def sign(signing_key: bytes, string_to_sign: str) -> str:
    return hexlify(hmac_sha256(signing_key, string_to_sign)).decode()


class AWSv4Auth:
    __slots__ = ("aws_secret_key", "aws_access_key", "region", "service")

    def __init__(
        self,
        aws_secret_key: str,
        aws_access_key: str,
        region: str,
        service: str = "s3",
    ) -> None:
        self.aws_secret_key = aws_secret_key
        self.aws_access_key = aws_access_key
        self.region = region
        self.service = service

    def auth_headers(
        self,
        method: str,
        host: str,
        path: str,
        query: Iterable[tuple[str, str]],
        *,
        data: bytes | None = None,
        dt: datetime,
    ) -> dict[str, str]:
        """
        Returns `Host`, `x-amz-content-sha256`, `x-amz-date` and `Authorization`
        headers for a request issued at `dt` (must be in UTC).
        """
        data = data or b""
        amz_date = _aws4_x_amz_date(dt)
        payload_hash = sha256_hexdigest(data)

        signature = self.aws4_signature(
            dt, method, host, path, query, payload_hash
        )
        credential = self.aws4_credential(dt)
        authorization_header = (
            f"{_AUTH_ALGORITHM} "
            f"Credential={credential},"
            f"SignedHeaders={';'.join(SIGNED_HEADERS)},"
            f"Signature={signature}"
        )
        return {
            "Host": host,
            "x-amz-content-sha256": payload_hash,
            "x-amz-date": amz_date,
            "Authorization": authorization_header,
        }

    def aws4_signature(
        self,
        dt: datetime,
        method: str,
        host: str,
        path: str,
        query: Iterable[tuple[str, str]],
        payload_hash: str,
    ) -> str:
        request = canonical_request(
            method, path, query, host, payload_hash, _aws4_x_amz_date(dt)
        )
        to_sign = string_to_sign(_aws4_x_amz_date(dt), self._aws4_scope(dt), request)
        return self.aws4_sign_string(to_sign, dt)

    def aws4_sign_string(self, string_to_sign: str, dt: datetime) -> str:
        signing_key = derive_signing_key(
            self.aws_secret_key, _aws4_date_stamp(dt), self.region, self.service
        )
        return sign(signing_key, string_to_sign)

    def _aws4_scope(self, dt: datetime) -> str:
        return credential_scope(_aws4_date_stamp(dt), self.region, self.service)

    def aws4_credential(self, dt: datetime) -> str:
        return f"{self.aws_access_key}/{self._aws4_scope(dt)}"


def _aws4_date_stamp(dt: datetime) -> str:
    return dt.strftime("%Y%m%d")


def _aws4_x_amz_date(dt: datetime) -> str:
    return dt.strftime("%Y%m%dT%H%M%SZ")
