"""
Service provider for dependency injection.

This module provides all service dependencies.
"""

from collections.abc import AsyncIterable

import httpx
from dishka import Provider, Scope, from_context, provide

from src.core.config import Config
from src.core.logging import get_logger
from src.services.classifier_client import ClassifierClient
from src.services.detection_service import DetectionService

logger = get_logger(__name__)


class ServiceProvider(Provider):
    """
    Provider for service dependencies.

    All services are provided at APP scope (singleton). ``transport`` replaces
    the network layer of the shared HTTP client when given.
    """

    config = from_context(provides=Config, scope=Scope.APP)

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__()
        self._transport = transport

    @provide(scope=Scope.APP)
    async def provide_http_client(self, config: Config) -> AsyncIterable[httpx.AsyncClient]:
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.classifier.request_timeout_seconds),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        logger.info("classifier_http_client_ready", base_url=config.classifier.base_url)
        yield client
        await client.aclose()
        logger.info("classifier_http_client_closed")

    @provide(scope=Scope.APP)
    def provide_classifier_client(
        self,
        http_client: httpx.AsyncClient,
        config: Config,
    ) -> ClassifierClient:
        return ClassifierClient(http_client, config.classifier)

    @provide(scope=Scope.APP)
    def provide_detection_service(
        self,
        client: ClassifierClient,
        config: Config,
    ) -> DetectionService:
        return DetectionService(client, config.classifier)
