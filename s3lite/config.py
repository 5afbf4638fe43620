from __future__ import annotations

from typing import Annotated, Literal

from pydantic.functional_validators import AfterValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "S3Config",
]

DEFAULT_ENDPOINT = "s3.amazonaws.com"
DEFAULT_REGION = "us-east-1"


def _strip_endpoint(value: str) -> str:
    value = value.strip()
    for prefix in ("https://", "http://"):
        if value.startswith(prefix):
            value = value[len(prefix):]
    value = value.rstrip("/")
    if not value:
        raise ValueError("endpoint host can't be empty")
    return value


EndpointHost = Annotated[str, AfterValidator(_strip_endpoint)]


class S3Config(BaseSettings):
    endpoint: EndpointHost = DEFAULT_ENDPOINT
    scheme: Literal["http", "https"] = "https"
    region: str = DEFAULT_REGION
    timeout: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="S3LITE_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )
