import asyncio
import unittest
from unittest.mock import Mock

import requests

from plantid.client import DEFAULT_ENDPOINT, PlantIdClient
from plantid.errors import ErrorKind, NetworkError, ServiceError
from plantid.types import ClassificationRequest


def _response(status_code: int = 200, payload=None, json_error: Exception | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class PlantIdClientTests(unittest.TestCase):
    def _client(self, response: Mock | None = None, api_key: str = "test-key") -> tuple[PlantIdClient, Mock]:
        session = Mock()
        if response is not None:
            session.post.return_value = response
        return PlantIdClient(api_key=api_key, session=session), session

    def test_classify_posts_payload_and_headers(self) -> None:
        body = {"suggestions": [{"plant_name": "Monstera deliciosa", "probability": 0.97}]}
        client, session = self._client(_response(payload=body))
        request = ClassificationRequest(image="data:image/jpeg;base64,AAAA", similar_images=True)

        result = asyncio.run(client.classify(request))

        self.assertEqual(result, body)
        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        self.assertEqual(args[0], DEFAULT_ENDPOINT)
        self.assertEqual(
            kwargs["json"],
            {"images": ["data:image/jpeg;base64,AAAA"], "similar_images": True},
        )
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")
        self.assertEqual(kwargs["headers"]["Api-Key"], "test-key")
        self.assertIsNone(kwargs["timeout"])

    def test_plant_details_included_only_when_requested(self) -> None:
        client, session = self._client(_response(payload={"suggestions": []}))
        request = ClassificationRequest(
            image="abc", similar_images=False, plant_details=("common_names", "taxonomy")
        )

        asyncio.run(client.classify(request))

        payload = session.post.call_args.kwargs["json"]
        self.assertFalse(payload["similar_images"])
        self.assertEqual(payload["plant_details"], ["common_names", "taxonomy"])

    def test_missing_key_is_sent_as_empty_header(self) -> None:
        client, session = self._client(_response(status_code=401, payload={}), api_key="")

        with self.assertRaises(ServiceError) as ctx:
            asyncio.run(client.classify(ClassificationRequest(image="abc")))

        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(session.post.call_args.kwargs["headers"]["Api-Key"], "")

    def test_transport_failure_raises_network_error(self) -> None:
        client, session = self._client()
        session.post.side_effect = requests.ConnectionError("connection reset")

        with self.assertRaises(NetworkError) as ctx:
            asyncio.run(client.classify(ClassificationRequest(image="abc")))

        self.assertEqual(ctx.exception.kind, ErrorKind.NETWORK_ERROR)
        self.assertIn("connection reset", str(ctx.exception))

    def test_timeout_raises_network_error(self) -> None:
        client, session = self._client()
        session.post.side_effect = requests.Timeout("read timed out")

        with self.assertRaises(NetworkError):
            asyncio.run(client.classify(ClassificationRequest(image="abc")))

    def test_non_success_status_raises_service_error(self) -> None:
        client, _ = self._client(_response(status_code=500, payload={"error": "boom"}))

        with self.assertRaises(ServiceError) as ctx:
            asyncio.run(client.classify(ClassificationRequest(image="abc")))

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.kind, ErrorKind.SERVICE_ERROR)

    def test_invalid_json_raises_service_error(self) -> None:
        client, _ = self._client(_response(json_error=ValueError("Expecting value")))

        with self.assertRaises(ServiceError):
            asyncio.run(client.classify(ClassificationRequest(image="abc")))

    def test_non_object_body_raises_service_error(self) -> None:
        client, _ = self._client(_response(payload=["not", "an", "object"]))

        with self.assertRaises(ServiceError):
            asyncio.run(client.classify(ClassificationRequest(image="abc")))


if __name__ == "__main__":
    unittest.main()
