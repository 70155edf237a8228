from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, ClassVar, Protocol, Union

from plantid.errors import ErrorKind, ScanError
from plantid.normalizer import normalize
from plantid.types import (
    ClassificationClient,
    ClassificationRequest,
    NoMatch,
    PlantIdentification,
)

from .capture import ImageAcquirer, RawImage
from .encoder import EncodedImage, ImageEncoder
from .notify import (
    FAILURE_NOTIFICATION,
    NO_MATCH_NOTIFICATION,
    LoggingNotifier,
    Notification,
    Notifier,
    plant_identified,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    kind: ClassVar[str] = "idle"


@dataclass(frozen=True)
class Previewing:
    image: RawImage
    kind: ClassVar[str] = "previewing"


@dataclass(frozen=True)
class Scanning:
    image: RawImage
    kind: ClassVar[str] = "scanning"


@dataclass(frozen=True)
class Success:
    image: RawImage
    result: PlantIdentification
    kind: ClassVar[str] = "success"


@dataclass(frozen=True)
class Failed:
    image: RawImage
    reason: ErrorKind
    kind: ClassVar[str] = "failed"


ScanState = Union[Idle, Previewing, Scanning, Success, Failed]

StateListener = Callable[[ScanState], None]


class Encoder(Protocol):
    async def encode(self, image: RawImage) -> EncodedImage: ...


class ScanSession:
    """Owns the scan state machine: acquire -> encode -> classify -> normalize.

    Only one pipeline runs at a time. Every pipeline is stamped with a
    generation number; ``clear()`` and new submissions bump it, so a result
    that arrives for an older generation is dropped without touching state
    or notifying the user.
    """

    def __init__(
        self,
        client: ClassificationClient,
        acquirer: ImageAcquirer | None = None,
        encoder: Encoder | None = None,
        notifier: Notifier | None = None,
        normalizer: Callable[[object], PlantIdentification | NoMatch] = normalize,
        similar_images: bool = True,
        plant_details: tuple[str, ...] = (),
    ) -> None:
        self._client = client
        self._acquirer = acquirer
        self._encoder: Encoder = encoder or ImageEncoder()
        self._notifier: Notifier = notifier or LoggingNotifier()
        self._normalize = normalizer
        self._similar_images = similar_images
        self._plant_details = plant_details
        self._state: ScanState = Idle()
        self._generation = 0
        self._tasks: set[asyncio.Task[ScanState]] = set()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def is_scanning(self) -> bool:
        return isinstance(self._state, Scanning)

    @property
    def preview(self) -> str | None:
        image = getattr(self._state, "image", None)
        return image.preview if image is not None else None

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def acquire(self) -> ScanState:
        """Ask the acquirer for an image and scan it; cancellation changes nothing."""
        if self.is_scanning:
            logger.warning("Capture ignored: a scan is already in progress")
            return self._state
        if self._acquirer is None:
            raise RuntimeError("ScanSession has no image acquirer configured")
        image = await asyncio.to_thread(self._acquirer.acquire)
        if image is None:
            logger.info("Image acquisition cancelled")
            return self._state
        return await self.submit(image)

    async def submit(self, image: RawImage) -> ScanState:
        return await self.start(image)

    def start(self, image: RawImage) -> asyncio.Task[ScanState]:
        """Enter Previewing then Scanning right away and schedule the pipeline."""
        if self.is_scanning:
            logger.warning("New scan started while generation=%d is outstanding", self._generation)
        self._generation += 1
        generation = self._generation
        self._set_state(Previewing(image))
        self._set_state(Scanning(image))
        logger.info(
            "Scan started generation=%d file=%s bytes=%d",
            generation,
            image.filename,
            len(image.data),
        )
        task = asyncio.get_running_loop().create_task(self._run_pipeline(image, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def clear(self) -> ScanState:
        """Drop the image and any result. Always succeeds."""
        self._generation += 1
        self._set_state(Idle())
        return self._state

    async def _run_pipeline(self, image: RawImage, generation: int) -> ScanState:
        outcome: PlantIdentification | NoMatch | ErrorKind
        try:
            encoded = await self._encoder.encode(image)
            request = ClassificationRequest(
                image=encoded.value,
                similar_images=self._similar_images,
                plant_details=self._plant_details,
            )
            raw = await self._client.classify(request)
            outcome = self._normalize(raw)
        except ScanError as exc:
            logger.warning("Scan failed generation=%d kind=%s: %s", generation, exc.kind.value, exc)
            outcome = exc.kind
        except Exception:
            logger.exception("Unexpected failure while identifying plant generation=%d", generation)
            outcome = ErrorKind.SERVICE_ERROR

        if generation != self._generation:
            logger.debug("Discarding result of superseded scan generation=%d", generation)
            return self._state

        if isinstance(outcome, PlantIdentification):
            self._set_state(Success(image, outcome))
            self._notify(plant_identified(outcome.scientific_name))
            logger.info(
                "Plant identified name=%s probability=%s",
                outcome.scientific_name,
                outcome.probability,
            )
        elif isinstance(outcome, NoMatch):
            self._set_state(Failed(image, ErrorKind.NO_MATCH_FOUND))
            self._notify(NO_MATCH_NOTIFICATION)
        else:
            self._set_state(Failed(image, outcome))
            self._notify(FAILURE_NOTIFICATION)
        return self._state

    def _set_state(self, state: ScanState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def _notify(self, notification: Notification) -> None:
        try:
            self._notifier.notify(notification)
        except Exception:
            logger.exception("Notifier failed for %r", notification.title)


__all__ = [
    "Failed",
    "Idle",
    "Previewing",
    "ScanSession",
    "ScanState",
    "Scanning",
    "Success",
]
