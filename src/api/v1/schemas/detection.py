from pydantic import BaseModel, ConfigDict, Field

from src.dtos.detection_dto import DetectionResultDTO, HealthReportDTO


class DetectionRequest(BaseModel):
    """Documented request body. The handler reads raw JSON to report field errors itself."""

    text: str


class Probabilities(BaseModel):
    human: int = Field(ge=0, le=100)
    ai: int = Field(ge=0, le=100)


class DetectionDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text_length: int = Field(alias="textLength")
    reason: str
    source: str


class DetectionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_ai: bool = Field(alias="isAI")
    confidence: int = Field(ge=0, le=100)
    prediction: int
    probabilities: Probabilities
    details: DetectionDetails

    @classmethod
    def from_dto(cls, result: DetectionResultDTO) -> "DetectionResponse":
        return cls(
            is_ai=result.is_ai,
            confidence=result.confidence,
            prediction=result.prediction,
            probabilities=Probabilities(
                human=result.probabilities.human,
                ai=result.probabilities.ai,
            ),
            details=DetectionDetails(
                text_length=result.details.text_length,
                reason=result.details.reason,
                source=result.details.source,
            ),
        )


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str
    message: str
    classifier_api: str = Field(alias="flaskApi")
    error: str | None = None

    @classmethod
    def from_dto(cls, report: HealthReportDTO) -> "HealthResponse":
        return cls(
            status=report.status.value,
            message=report.message,
            classifier_api=report.classifier_api,
            error=report.error,
        )


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
