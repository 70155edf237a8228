from __future__ import annotations

import base64
import logging
import mimetypes
import pathlib
from dataclasses import dataclass
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

_DEFAULT_MEDIA_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class RawImage:
    """Image picked or captured by the user, plus a preview for immediate display."""

    data: bytes
    filename: str
    media_type: str
    preview: str

    @classmethod
    def from_bytes(
        cls, data: bytes, filename: str = "capture", media_type: str | None = None
    ) -> "RawImage":
        if not media_type:
            media_type = mimetypes.guess_type(filename)[0] or _DEFAULT_MEDIA_TYPE
        encoded = base64.b64encode(data).decode("ascii")
        return cls(
            data=data,
            filename=filename,
            media_type=media_type,
            preview=f"data:{media_type};base64,{encoded}",
        )

    def __repr__(self) -> str:
        return f"RawImage(filename={self.filename!r}, media_type={self.media_type!r}, size={len(self.data)})"


class ImageAcquirer(Protocol):
    def acquire(self) -> RawImage | None:
        """Return the chosen image, or ``None`` when the user cancelled."""
        ...


def _read_image(path: pathlib.Path) -> RawImage | None:
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.warning("Unable to read %s: %s", path, exc)
        return None
    return RawImage.from_bytes(data, filename=path.name)


class FileAcquirer:
    """Selects one fixed file, as a file picker would."""

    def __init__(self, path: pathlib.Path) -> None:
        self._path = path

    def acquire(self) -> RawImage | None:
        if not self._path.is_file():
            logger.warning("Image file not found: %s", self._path)
            return None
        return _read_image(self._path)


class PromptAcquirer:
    """Interactive picker: asks for a path, a blank answer cancels."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        prompt: str = "Image path (blank to cancel): ",
    ) -> None:
        self._input = input_fn
        self._prompt = prompt

    def acquire(self) -> RawImage | None:
        try:
            answer = self._input(self._prompt)
        except EOFError:
            return None
        text = answer.strip().strip('"')
        if not text:
            return None
        path = pathlib.Path(text).expanduser()
        if not path.is_file():
            logger.warning("Image file not found: %s", path)
            return None
        return _read_image(path)


class CameraAcquirer:
    """Capture stills from an OpenCV-compatible source (USB/RTSP)."""

    def __init__(
        self,
        source: int | str = 0,
        *,
        warmup_frames: int = 2,
    ) -> None:
        try:
            import cv2  # type: ignore
        except ImportError as exc:  # pragma: no cover - depends on optional dep
            raise RuntimeError("opencv-python is required for CameraAcquirer") from exc

        self._cv2 = cv2
        self._source = source
        self._cap = cv2.VideoCapture(source)
        if not self._cap.isOpened():
            raise RuntimeError(f"Unable to open camera source {source!r}")
        for _ in range(max(0, warmup_frames)):
            ok, _ = self._cap.read()
            if not ok:
                break

    def acquire(self) -> RawImage | None:
        if self._cap is None:
            return None
        ok, frame = self._cap.read()
        if not ok or frame is None:
            logger.warning("Camera %r returned no frame", self._source)
            return None
        success, buffer = self._cv2.imencode(".jpg", frame)
        if not success:
            logger.warning("OpenCV failed to encode frame from %r", self._source)
            return None
        return RawImage.from_bytes(buffer.tobytes(), filename="capture.jpg", media_type="image/jpeg")

    def release(self) -> None:
        if getattr(self, "_cap", None) is not None:
            self._cap.release()
            self._cap = None


__all__ = ["CameraAcquirer", "FileAcquirer", "ImageAcquirer", "PromptAcquirer", "RawImage"]
