from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Sequence

import uvicorn
from dotenv import load_dotenv

from plantid.client import PlantIdClient
from plantid.config import ScannerConfig, load_config

from .capture import CameraAcquirer, FileAcquirer, ImageAcquirer, PromptAcquirer
from .notify import ConsoleNotifier
from .presentation import render_state
from .session import Idle, ScanSession, ScanState, Scanning
from .web import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Identify plants from photos using the Plant.id service",
        epilog="The API key is read from PLANT_ID_API_KEY (a .env file is honoured).",
    )
    parser.add_argument(
        "--acquire",
        choices=["prompt", "file", "camera"],
        default="prompt",
        help="how images are picked (ignored with --serve)",
    )
    parser.add_argument(
        "--image",
        default=None,
        help="image to scan when --acquire=file",
    )
    parser.add_argument(
        "--camera-source",
        default="0",
        help="camera index or stream URL when --acquire=camera",
    )
    parser.add_argument(
        "--camera-warmup",
        type=int,
        default=2,
        help="number of frames to discard after opening the camera",
    )
    parser.add_argument(
        "--serve", action="store_true", help="serve the scanner over HTTP instead of the terminal"
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind address")
    parser.add_argument("--port", type=int, default=8000, help="HTTP port")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def build_acquirer(args: argparse.Namespace) -> ImageAcquirer:
    if args.acquire == "file":
        if not args.image:
            raise SystemExit("--image is required when --acquire=file")
        return FileAcquirer(Path(args.image))
    if args.acquire == "camera":
        try:
            source: int | str = int(args.camera_source)
        except ValueError:
            source = args.camera_source
        return CameraAcquirer(source=source, warmup_frames=args.camera_warmup)
    return PromptAcquirer()


def build_session(
    config: ScannerConfig, acquirer: ImageAcquirer | None = None, notifier=None
) -> ScanSession:
    client = PlantIdClient(
        api_key=config.api_key,
        endpoint=config.endpoint,
        timeout=config.timeout,
    )
    return ScanSession(
        client=client,
        acquirer=acquirer,
        notifier=notifier,
        similar_images=config.similar_images,
        plant_details=config.plant_details,
    )


def _print_state(state: ScanState) -> None:
    if isinstance(state, (Idle, Scanning)):
        return
    for line in render_state(state):
        print(f"  {line}")


async def run_terminal(session: ScanSession, repeat: bool) -> ScanState:
    unsubscribe = session.subscribe(_print_state)
    try:
        while True:
            state = await session.acquire()
            if not repeat or isinstance(state, Idle):
                return state
            session.clear()
    finally:
        unsubscribe()


def main(argv: Sequence[str] | None = None) -> None:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(levelname)s [%(name)s] %(message)s",
        )

    try:
        config = load_config()
    except ValueError as exc:
        parser.error(str(exc))
    if not config.api_key:
        logger.warning("PLANT_ID_API_KEY is not set; the service will reject requests")

    if args.serve:
        session = build_session(config)
        logger.info("Serving plant scanner on %s:%d", args.host, args.port)
        uvicorn.run(create_app(session), host=args.host, port=args.port, log_level="info")
        return

    acquirer = build_acquirer(args)
    session = build_session(config, acquirer=acquirer, notifier=ConsoleNotifier())
    try:
        asyncio.run(run_terminal(session, repeat=args.acquire != "file"))
    except KeyboardInterrupt:
        print("Scanner stopped by user")
    finally:
        if isinstance(acquirer, CameraAcquirer):
            acquirer.release()


if __name__ == "__main__":
    main()
