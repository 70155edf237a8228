from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    ENCODING_ERROR = "encoding_error"
    NETWORK_ERROR = "network_error"
    SERVICE_ERROR = "service_error"
    NO_MATCH_FOUND = "no_match_found"


class ScanError(RuntimeError):
    """Terminal failure of a single scan attempt."""

    kind: ErrorKind = ErrorKind.SERVICE_ERROR


class EncodingError(ScanError):
    kind = ErrorKind.ENCODING_ERROR


class NetworkError(ScanError):
    kind = ErrorKind.NETWORK_ERROR


class ServiceError(ScanError):
    kind = ErrorKind.SERVICE_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = ["ErrorKind", "ScanError", "EncodingError", "NetworkError", "ServiceError"]
