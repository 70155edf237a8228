from __future__ import annotations

from typing import Any

from plantid.types import PlantIdentification

from .session import Failed, Idle, Previewing, ScanState, Scanning, Success


def format_confidence(probability: float | None) -> str | None:
    """Display form of a probability, e.g. ``0.97`` -> ``"97.0%"``."""
    if probability is None:
        return None
    return f"{probability * 100:.1f}%"


def _result_payload(result: PlantIdentification) -> dict[str, Any]:
    return {
        "scientific_name": result.scientific_name,
        "common_names": list(result.common_names) if result.common_names is not None else None,
        "probability": result.probability,
        "confidence": format_confidence(result.probability),
        "family": result.family,
        "genus": result.genus,
        "description": result.description,
    }


def describe_state(state: ScanState) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "state": state.kind,
        "is_scanning": isinstance(state, Scanning),
        "preview": None,
        "result": None,
        "reason": None,
    }
    if isinstance(state, Idle):
        return payload
    payload["preview"] = state.image.preview
    if isinstance(state, Success):
        payload["result"] = _result_payload(state.result)
    elif isinstance(state, Failed):
        payload["reason"] = state.reason.value
    return payload


def render_lines(result: PlantIdentification) -> list[str]:
    lines = [result.scientific_name or "Unknown plant"]
    if result.common_names:
        lines.append(f"Common names: {', '.join(result.common_names)}")
    confidence = format_confidence(result.probability)
    if confidence is not None:
        lines.append(f"Confidence: {confidence}")
    if result.family is not None:
        lines.append(f"Family: {result.family}")
    if result.genus is not None:
        lines.append(f"Genus: {result.genus}")
    if result.description:
        lines.append("Description:")
        lines.append(result.description)
    return lines


def render_state(state: ScanState) -> list[str]:
    if isinstance(state, Idle):
        return ["Ready to scan."]
    if isinstance(state, Previewing):
        return [f"Preview ready: {state.image.filename}"]
    if isinstance(state, Scanning):
        return [f"Identifying plant... ({state.image.filename})"]
    if isinstance(state, Success):
        return render_lines(state.result)
    return [f"Scan failed: {state.reason.value}"]


__all__ = ["describe_state", "format_confidence", "render_lines", "render_state"]
