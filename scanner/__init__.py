from __future__ import annotations

from .capture import CameraAcquirer, FileAcquirer, ImageAcquirer, PromptAcquirer, RawImage
from .encoder import EncodedImage, ImageEncoder
from .session import Failed, Idle, Previewing, ScanSession, ScanState, Scanning, Success

__all__ = [
    "CameraAcquirer",
    "EncodedImage",
    "Failed",
    "FileAcquirer",
    "Idle",
    "ImageAcquirer",
    "ImageEncoder",
    "Previewing",
    "PromptAcquirer",
    "RawImage",
    "ScanSession",
    "ScanState",
    "Scanning",
    "Success",
    "create_app",
]


def __getattr__(name: str):
    if name == "create_app":
        from .web import create_app

        return create_app
    raise AttributeError(f"module 'scanner' has no attribute {name!r}")
