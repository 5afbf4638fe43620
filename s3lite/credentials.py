from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from s3lite.errors import MissingCredentialsError

__all__ = [
    "Credentials",
    "ICredentialsProvider",
    "EnvironmentCredentialsProvider",
    "StaticCredentialsProvider",
]


@dataclass(frozen=True, slots=True)
class Credentials:
    access_key_id: str
    secret_key: str = field(repr=False)


class ICredentialsProvider(Protocol):
    @abc.abstractmethod
    def get_credentials(self) -> Credentials:
        """
        Returns credentials to sign a single request with.

        Raises:
            CredentialsError: If credentials can't be obtained.
        """
        raise NotImplementedError()  # pragma: no cover


class _EnvironmentCredentials(BaseSettings):
    aws_access_key_id: str
    aws_secret_access_key: str

    model_config = SettingsConfigDict(
        extra="ignore",
    )


class EnvironmentCredentialsProvider:
    """
    Reads `AWS_ACCESS_KEY_ID` and `AWS_SECRET_ACCESS_KEY` from the environment.

    The environment is read on every call, so a rotated secret is picked up by the
    next request.
    """

    __slots__ = ()

    def get_credentials(self) -> Credentials:
        try:
            env = _EnvironmentCredentials()  # type: ignore[call-arg]
        except ValidationError as exc:
            raise MissingCredentialsError() from exc
        return Credentials(
            access_key_id=env.aws_access_key_id,
            secret_key=env.aws_secret_access_key,
        )


class StaticCredentialsProvider:
    __slots__ = ("_credentials", )

    def __init__(self, access_key_id: str, secret_key: str):
        self._credentials = Credentials(
            access_key_id=access_key_id,
            secret_key=secret_key,
        )

    def get_credentials(self) -> Credentials:
        return self._credentials
