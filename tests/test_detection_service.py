import pytest

from src.core.exceptions import InternalDetectionError, UpstreamUnavailableError
from src.dtos.detection_dto import ClassifierOutputDTO
from src.services.detection_service import DetectionService


class _StubClient:
    def __init__(self, outcome) -> None:
        self._outcome = outcome
        self.texts: list[str] = []

    async def classify(self, text: str) -> ClassifierOutputDTO:
        self.texts.append(text)
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return self._outcome


@pytest.mark.asyncio
async def test_detect_uses_configured_source_and_trimmed_text(classifier_config):
    client = _StubClient(ClassifierOutputDTO(prediction=0, probabilities=(0.75, 0.25)))
    service = DetectionService(client, classifier_config.model_copy(update={"source_label": "Stub"}))

    result = await service.detect({"text": "  plenty of words here  "})

    assert client.texts == ["plenty of words here"]
    assert result.details.source == "Stub"
    assert result.confidence == 75


@pytest.mark.asyncio
async def test_detect_keeps_domain_errors(classifier_config):
    error = UpstreamUnavailableError("Classifier API error: 500 200", 500, 200)
    service = DetectionService(_StubClient(error), classifier_config)

    with pytest.raises(UpstreamUnavailableError) as exc:
        await service.detect({"text": "plenty of words here"})

    assert exc.value is error


@pytest.mark.asyncio
async def test_detect_wraps_unexpected_errors(classifier_config):
    service = DetectionService(_StubClient(KeyError("probabilities")), classifier_config)

    with pytest.raises(InternalDetectionError) as exc:
        await service.detect({"text": "plenty of words here"})

    assert isinstance(exc.value.__cause__, KeyError)
    assert exc.value.message == "'probabilities'"
