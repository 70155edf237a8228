from __future__ import annotations

from .errors import EncodingError, ErrorKind, NetworkError, ScanError, ServiceError
from .types import NO_MATCH, ClassificationRequest, NoMatch, PlantIdentification

__all__ = [
    "ClassificationRequest",
    "EncodingError",
    "ErrorKind",
    "NO_MATCH",
    "NetworkError",
    "NoMatch",
    "PlantIdClient",
    "PlantIdentification",
    "ScanError",
    "ServiceError",
    "normalize",
]


def __getattr__(name: str):
    if name == "PlantIdClient":
        from .client import PlantIdClient

        return PlantIdClient
    if name == "normalize":
        from .normalizer import normalize

        return normalize
    raise AttributeError(f"module 'plantid' has no attribute {name!r}")
