from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
)


class _LenientModel(BaseModel):
    """Response fragment where every field is optional and malformed values read as unknown."""

    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="wrap")
    @classmethod
    def _drop_invalid(cls, value: Any, handler: Any) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None


class WikiDescription(_LenientModel):
    value: Optional[str] = None


class Taxonomy(_LenientModel):
    family: Optional[str] = None
    genus: Optional[str] = None


class PlantDetails(_LenientModel):
    common_names: Optional[List[str]] = None
    wiki_description: Optional[WikiDescription] = None
    taxonomy: Optional[Taxonomy] = None

    @field_validator("common_names", mode="before")
    @classmethod
    def _keep_string_names(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [name for name in value if isinstance(name, str)]
        return value


class Suggestion(_LenientModel):
    plant_name: Optional[str] = None
    # Strict so a quoted number is not silently converted.
    probability: Optional[Union[StrictFloat, StrictInt]] = None
    plant_details: Optional[PlantDetails] = None


class IdentificationResponse(_LenientModel):
    suggestions: Optional[List[Any]] = None

    def top_suggestion(self) -> Suggestion | None:
        """First suggestion as ranked by the service; a malformed entry reads as all-unknown."""
        if not self.suggestions:
            return None
        first = self.suggestions[0]
        if isinstance(first, dict):
            return Suggestion.model_validate(first)
        return Suggestion()


__all__ = [
    "IdentificationResponse",
    "PlantDetails",
    "Suggestion",
    "Taxonomy",
    "WikiDescription",
]
