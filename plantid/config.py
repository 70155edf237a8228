from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from .client import DEFAULT_ENDPOINT

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ScannerConfig:
    api_key: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    similar_images: bool = True
    timeout: float | None = None
    plant_details: tuple[str, ...] = ()


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"PLANT_ID_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError("PLANT_ID_TIMEOUT must be positive")
    return timeout


def load_config(env: Mapping[str, str] | None = None) -> ScannerConfig:
    """Build the scanner configuration from environment variables."""
    source = os.environ if env is None else env
    similar_raw = source.get("PLANT_ID_SIMILAR_IMAGES")
    similar_images = True if similar_raw is None else similar_raw.strip().lower() in _TRUTHY
    details = tuple(
        part.strip() for part in source.get("PLANT_ID_DETAILS", "").split(",") if part.strip()
    )
    return ScannerConfig(
        api_key=source.get("PLANT_ID_API_KEY", "").strip(),
        endpoint=source.get("PLANT_ID_ENDPOINT", "").strip() or DEFAULT_ENDPOINT,
        similar_images=similar_images,
        timeout=_parse_timeout(source.get("PLANT_ID_TIMEOUT")),
        plant_details=details,
    )


__all__ = ["ScannerConfig", "load_config"]
