from __future__ import annotations

import enum

__all__ = [
    "ErrorCode",
    "Error",
    "CredentialsError",
    "MissingCredentialsError",
    "TransportError",
    "HttpStatusError",
    "UnmarshalError",
    "InvalidEncodingError",
    "MarkupParseError",
    "RequiredFieldMissingError",
    "FieldInvalidError",
]


class ErrorCode(str, enum.Enum):
    credentials = "credentials_error"
    missing_credentials = "missing_credentials"
    transport = "transport_error"
    http_status = "http_status_error"
    unmarshal = "unmarshal_error"
    invalid_encoding = "invalid_encoding"
    markup_parse = "markup_parse_error"
    required_field_missing = "required_field_missing"
    field_invalid = "field_invalid"


class Error(Exception):
    """Base class for all client errors"""

    code: ErrorCode


class CredentialsError(Error):
    code = ErrorCode.credentials


class MissingCredentialsError(CredentialsError):
    code = ErrorCode.missing_credentials

    def __init__(self, msg: str = "Could not find AWS credentials"):
        super().__init__(msg)


class TransportError(Error):
    code = ErrorCode.transport

    def __init__(self, detail: str):
        super().__init__(f"HTTP request error: {detail}")
        self.detail = detail


class HttpStatusError(Error):
    code = ErrorCode.http_status

    def __init__(self, status_code: int):
        super().__init__(f"HTTP Error: {status_code}")
        self.status_code = status_code


class UnmarshalError(Error):
    code = ErrorCode.unmarshal


class InvalidEncodingError(UnmarshalError):
    code = ErrorCode.invalid_encoding

    def __init__(self, msg: str = "Response body is not UTF-8"):
        super().__init__(msg)


class MarkupParseError(UnmarshalError):
    code = ErrorCode.markup_parse

    def __init__(self, line: int, column: int, message: str):
        super().__init__(f"XML Error: Line: {line} Column: {column} Msg: {message}")
        self.line = line
        self.column = column
        self.message = message


class RequiredFieldMissingError(UnmarshalError):
    code = ErrorCode.required_field_missing

    def __init__(self, field: str):
        super().__init__(f"Required field is missing: {field}")
        self.field = field


class FieldInvalidError(UnmarshalError):
    code = ErrorCode.field_invalid

    def __init__(self, field: str):
        super().__init__(f"{field} contents invalid")
        self.field = field
