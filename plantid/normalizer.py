from __future__ import annotations

from typing import Any

from .schemas import IdentificationResponse
from .types import NO_MATCH, NoMatch, PlantIdentification


def normalize(raw: Any) -> PlantIdentification | NoMatch:
    """Map a raw identification response onto its top suggestion.

    The service ranks suggestions itself, so the first entry is taken as-is
    with no thresholding. Missing or malformed fields come back as ``None``.
    """
    if not isinstance(raw, dict):
        return NO_MATCH
    response = IdentificationResponse.model_validate(raw)
    top = response.top_suggestion()
    if top is None:
        return NO_MATCH

    details = top.plant_details
    taxonomy = details.taxonomy if details else None
    wiki = details.wiki_description if details else None
    common_names = details.common_names if details else None

    return PlantIdentification(
        scientific_name=top.plant_name,
        common_names=tuple(common_names) if common_names is not None else None,
        probability=top.probability,
        family=taxonomy.family if taxonomy else None,
        genus=taxonomy.genus if taxonomy else None,
        description=wiki.value if wiki else None,
    )


__all__ = ["normalize"]
