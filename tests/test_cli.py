import asyncio
import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from plantid.client import PlantIdClient
from plantid.config import ScannerConfig
from scanner.capture import FileAcquirer, PromptAcquirer
from scanner.main import build_acquirer, build_parser, build_session, run_terminal
from scanner.notify import ConsoleNotifier
from scanner.session import Failed, Idle, ScanSession


class _FailingClient:
    async def classify(self, request):
        return {"suggestions": []}


class CliTests(unittest.TestCase):
    def test_build_acquirer_defaults_to_prompt(self) -> None:
        args = build_parser().parse_args([])

        self.assertIsInstance(build_acquirer(args), PromptAcquirer)

    def test_build_acquirer_file_requires_image(self) -> None:
        args = build_parser().parse_args(["--acquire", "file"])

        with self.assertRaises(SystemExit):
            build_acquirer(args)

    def test_build_acquirer_file(self) -> None:
        args = build_parser().parse_args(["--acquire", "file", "--image", "leaf.jpg"])

        self.assertIsInstance(build_acquirer(args), FileAcquirer)

    def test_build_session_uses_configured_client(self) -> None:
        config = ScannerConfig(api_key="abc", endpoint="https://plant.example/identify", timeout=5.0)

        session = build_session(config)

        client = session._client  # noqa: SLF001 - inspecting wiring
        self.assertIsInstance(client, PlantIdClient)
        self.assertEqual(client.api_key, "abc")
        self.assertEqual(client.endpoint, "https://plant.example/identify")
        self.assertEqual(client.timeout, 5.0)

    def test_run_terminal_prints_outcome_and_notification(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.jpg"
            path.write_bytes(b"")
            out = io.StringIO()
            session = ScanSession(
                client=_FailingClient(),
                acquirer=FileAcquirer(path),
                notifier=ConsoleNotifier(stream=out),
            )

            with contextlib.redirect_stdout(out):
                state = asyncio.run(run_terminal(session, repeat=False))

        self.assertIsInstance(state, Failed)
        output = out.getvalue()
        self.assertIn("[warning] No Match Found - Try a clearer image or different angle.", output)
        self.assertIn("Scan failed: no_match_found", output)

    def test_run_terminal_stops_on_cancel(self) -> None:
        session = ScanSession(
            client=_FailingClient(),
            acquirer=PromptAcquirer(input_fn=lambda _: ""),
        )

        state = asyncio.run(run_terminal(session, repeat=True))

        self.assertEqual(state, Idle())


if __name__ == "__main__":
    unittest.main()
