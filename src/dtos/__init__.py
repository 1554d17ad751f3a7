"""
Data Transfer Objects (DTOs) package.

DTOs are simple dataclasses used to transfer data between layers.
"""

from src.dtos.detection_dto import (
    ClassifierOutputDTO,
    DetectionDetailsDTO,
    DetectionResultDTO,
    HealthReportDTO,
    HealthStatus,
    ProbabilitiesDTO,
)

__all__ = [
    "ClassifierOutputDTO",
    "DetectionDetailsDTO",
    "DetectionResultDTO",
    "HealthReportDTO",
    "HealthStatus",
    "ProbabilitiesDTO",
]
