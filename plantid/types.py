from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class ClassificationRequest:
    image: str
    similar_images: bool = True
    plant_details: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "images": [self.image],
            "similar_images": self.similar_images,
        }
        if self.plant_details:
            payload["plant_details"] = list(self.plant_details)
        return payload


@dataclass(frozen=True)
class PlantIdentification:
    """Top match of a scan. ``None`` on any field means the service did not say."""

    scientific_name: str | None = None
    common_names: tuple[str, ...] | None = None
    probability: float | None = None
    family: str | None = None
    genus: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class NoMatch:
    pass


NO_MATCH = NoMatch()


class ClassificationClient(Protocol):
    async def classify(self, request: ClassificationRequest) -> dict[str, Any]: ...


__all__ = [
    "ClassificationClient",
    "ClassificationRequest",
    "NO_MATCH",
    "NoMatch",
    "PlantIdentification",
]
