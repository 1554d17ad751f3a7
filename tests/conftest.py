"""Pytest configuration and fixtures."""
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from src.core.config import ClassifierConfig, Config
from src.main import create_app

CLASSIFIER_URL = "http://classifier.test"


class FakeClassifier:
    """Stands in for the classifier service behind an ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.respond("/predict", json={"predictions": [1]})
        self.respond("/predict_proba", json={"probabilities": [[0.2, 0.8]]})
        self.respond("/", json={"status": "ok"})

    def respond(
        self,
        path: str,
        status_code: int = 200,
        json=None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if json is not None:
            self._routes[path] = lambda request: httpx.Response(status_code, json=json, headers=headers)
        else:
            self._routes[path] = lambda request: httpx.Response(
                status_code, content=content or b"", headers=headers
            )

    def refuse(self, path: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        self._routes[path] = handler

    def crash(self, path: str, exc: Exception) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self._routes[path] = handler

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._routes[request.url.path](request)


@pytest.fixture
def classifier():
    return FakeClassifier()


@pytest.fixture
def classifier_config():
    return ClassifierConfig(
        base_url=CLASSIFIER_URL,
        request_timeout_seconds=1.0,
        health_timeout_seconds=0.5,
    )


@pytest.fixture
def app_config(classifier_config):
    return Config(classifier=classifier_config, expose_error_details=True)


@pytest.fixture
def client(app_config, classifier):
    """Create a test client whose outbound calls reach the fake classifier."""
    app = create_app(app_config, transport=httpx.MockTransport(classifier))
    with TestClient(app) as test_client:
        yield test_client
