"""HTTP client for the external AI-vs-human text classifier."""
import asyncio
from typing import Any

import httpx

from src.core.config import ClassifierConfig
from src.core.exceptions import (
    InternalDetectionError,
    MalformedUpstreamResponseError,
    UpstreamUnavailableError,
)
from src.core.logging import get_logger
from src.dtos.detection_dto import ClassifierOutputDTO, HealthReportDTO, HealthStatus

logger = get_logger(__name__)

_PREDICT_ENDPOINT = "/predict"
_PREDICT_PROBA_ENDPOINT = "/predict_proba"
_VALID_PREDICTIONS = (0, 1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _describe_status(status: int | None) -> str:
    return str(status) if status is not None else "unreachable"


class ClassifierClient:
    """
    Calls the classifier's prediction and probability endpoints.

    Both endpoints receive the same single-item payload and are awaited
    together; the client never retries.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: ClassifierConfig) -> None:
        self._http = http_client
        self._settings = settings

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    async def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        return await self._http.post(url, json=payload)

    async def classify(self, text: str) -> ClassifierOutputDTO:
        """Fetch prediction and probabilities for ``text`` concurrently."""
        payload = {"text": text}
        try:
            prediction_result, probability_result = await asyncio.wait_for(
                asyncio.gather(
                    self._post(self._settings.predict_url, payload),
                    self._post(self._settings.predict_proba_url, payload),
                    return_exceptions=True,
                ),
                timeout=self._settings.request_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                "classifier_request_timeout",
                base_url=self.base_url,
                timeout_seconds=self._settings.request_timeout_seconds,
            )
            raise UpstreamUnavailableError(
                f"Classifier API did not respond within "
                f"{self._settings.request_timeout_seconds} seconds"
            ) from e

        self._raise_for_failures(prediction_result, probability_result)

        prediction_body = self._read_json(prediction_result, _PREDICT_ENDPOINT)
        probability_body = self._read_json(probability_result, _PREDICT_PROBA_ENDPOINT)

        return ClassifierOutputDTO(
            prediction=self._extract_prediction(prediction_body),
            probabilities=self._extract_probabilities(probability_body),
        )

    def _raise_for_failures(
        self,
        prediction_result: httpx.Response | BaseException,
        probability_result: httpx.Response | BaseException,
    ) -> None:
        results = {
            _PREDICT_ENDPOINT: prediction_result,
            _PREDICT_PROBA_ENDPOINT: probability_result,
        }
        request_errors: list[httpx.RequestError] = []
        for result in results.values():
            if isinstance(result, httpx.DecodingError):
                continue
            if isinstance(result, httpx.RequestError):
                request_errors.append(result)
            elif isinstance(result, Exception):
                raise InternalDetectionError(str(result) or type(result).__name__) from result
            elif isinstance(result, BaseException):
                raise result

        prediction_status = getattr(prediction_result, "status_code", None)
        probability_status = getattr(probability_result, "status_code", None)

        failed = bool(request_errors) or any(
            isinstance(result, httpx.Response) and not result.is_success
            for result in results.values()
        )
        if failed:
            message = (
                f"Classifier API error: {_describe_status(prediction_status)} "
                f"{_describe_status(probability_status)}"
            )
            if request_errors:
                message = f"{message} ({type(request_errors[0]).__name__}: {request_errors[0]})"

            logger.warning(
                "classifier_request_failed",
                base_url=self.base_url,
                prediction_status=prediction_status,
                probability_status=probability_status,
                errors=[str(e) for e in request_errors],
            )
            raise UpstreamUnavailableError(
                message,
                prediction_status=prediction_status,
                probability_status=probability_status,
            ) from (request_errors[0] if request_errors else None)

        # Reachable with a success status, but the body could not be decoded
        for endpoint, result in results.items():
            if isinstance(result, httpx.DecodingError):
                raise MalformedUpstreamResponseError(
                    f"{endpoint} returned a body that could not be decoded: {result}", endpoint
                ) from result

    @staticmethod
    def _read_json(response: httpx.Response, endpoint: str) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedUpstreamResponseError(
                f"{endpoint} returned a body that is not valid JSON", endpoint
            ) from e

        if not isinstance(body, dict):
            raise MalformedUpstreamResponseError(
                f"{endpoint} returned {type(body).__name__} instead of an object", endpoint
            )
        return body

    @staticmethod
    def _first_item(body: dict[str, Any], key: str, endpoint: str) -> Any:
        items = body.get(key)
        if not isinstance(items, list) or not items:
            raise MalformedUpstreamResponseError(
                f"{endpoint} response has no '{key}' entries", endpoint
            )
        return items[0]

    def _extract_prediction(self, body: dict[str, Any]) -> int:
        prediction = self._first_item(body, "predictions", _PREDICT_ENDPOINT)
        if (
            isinstance(prediction, bool)
            or not isinstance(prediction, int)
            or prediction not in _VALID_PREDICTIONS
        ):
            raise MalformedUpstreamResponseError(
                f"{_PREDICT_ENDPOINT} returned prediction {prediction!r}, expected 0 or 1",
                _PREDICT_ENDPOINT,
            )
        return prediction

    def _extract_probabilities(self, body: dict[str, Any]) -> tuple[float, float]:
        pair = self._first_item(body, "probabilities", _PREDICT_PROBA_ENDPOINT)
        if (
            not isinstance(pair, list)
            or len(pair) != 2
            or not all(_is_number(p) and 0.0 <= p <= 1.0 for p in pair)
        ):
            raise MalformedUpstreamResponseError(
                f"{_PREDICT_PROBA_ENDPOINT} returned probabilities {pair!r}, "
                f"expected [human, ai] in [0, 1]",
                _PREDICT_PROBA_ENDPOINT,
            )
        return float(pair[0]), float(pair[1])

    async def probe(self) -> HealthReportDTO:
        """Check that the classifier answers on its liveness path. Never raises."""
        try:
            response = await asyncio.wait_for(
                self._http.get(self._settings.liveness_url),
                timeout=self._settings.health_timeout_seconds,
            )
        except Exception as e:
            logger.warning(
                "classifier_probe_failed",
                base_url=self.base_url,
                error=str(e) or type(e).__name__,
                error_type=type(e).__name__,
            )
            return HealthReportDTO(
                status=HealthStatus.UNHEALTHY,
                message="Classifier API is not accessible",
                classifier_api="disconnected",
                error=str(e) or type(e).__name__,
            )

        if response.is_success:
            return HealthReportDTO(
                status=HealthStatus.HEALTHY,
                message="AI detection API is running",
                classifier_api="connected",
            )

        logger.warning(
            "classifier_probe_degraded",
            base_url=self.base_url,
            status_code=response.status_code,
        )
        return HealthReportDTO(
            status=HealthStatus.DEGRADED,
            message="Classifier API is not responding correctly",
            classifier_api="error",
        )
