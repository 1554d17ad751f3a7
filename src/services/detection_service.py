"""AI text detection service: validates, classifies and reconciles."""
from typing import Any

from src.core.config import ClassifierConfig
from src.core.exceptions import DetectionError, InternalDetectionError
from src.core.logging import get_logger
from src.dtos.detection_dto import DetectionResultDTO, HealthReportDTO
from src.services.classifier_client import ClassifierClient
from src.services.result_reconciler import reconcile
from src.services.text_validator import validate_text

logger = get_logger(__name__)


class DetectionService:
    """Orchestrates one detection request against the external classifier."""

    def __init__(self, client: ClassifierClient, settings: ClassifierConfig) -> None:
        self._client = client
        self._settings = settings

    async def detect(self, payload: dict[str, Any]) -> DetectionResultDTO:
        """Validate ``payload['text']``, classify it and build the result.

        Raises:
            TextValidationError: text missing, not a string or too short.
            UpstreamUnavailableError: classifier unreachable or non-2xx.
            MalformedUpstreamResponseError: classifier reply breaks its contract.
            InternalDetectionError: anything else, wrapping the original error.
        """
        text = validate_text(payload.get("text"), self._settings.min_text_length)

        try:
            output = await self._client.classify(text)
            result = reconcile(
                output.prediction,
                output.probabilities,
                text,
                source=self._settings.source_label,
            )
        except DetectionError:
            raise
        except Exception as e:
            raise InternalDetectionError(str(e) or type(e).__name__) from e

        logger.info(
            "text_classified",
            is_ai=result.is_ai,
            confidence=result.confidence,
            text_length=result.details.text_length,
        )
        return result

    async def check_health(self) -> HealthReportDTO:
        return await self._client.probe()
