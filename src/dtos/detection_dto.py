from dataclasses import dataclass
from enum import Enum


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class ClassifierOutputDTO:
    prediction: int
    probabilities: tuple[float, float]  # (human, ai)


@dataclass
class ProbabilitiesDTO:
    human: int
    ai: int


@dataclass
class DetectionDetailsDTO:
    text_length: int
    reason: str
    source: str


@dataclass
class DetectionResultDTO:
    is_ai: bool
    confidence: int
    prediction: int
    probabilities: ProbabilitiesDTO
    details: DetectionDetailsDTO


@dataclass
class HealthReportDTO:
    status: HealthStatus
    message: str
    classifier_api: str
    error: str | None = None
