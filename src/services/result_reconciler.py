"""Merges the classifier's verdict and probability pair into one result."""
import math

from src.dtos.detection_dto import DetectionDetailsDTO, DetectionResultDTO, ProbabilitiesDTO


def round_percent(fraction: float) -> int:
    """Convert a probability to a whole percentage, rounding halves up."""
    return int(math.floor(fraction * 100 + 0.5))


def count_tokens(text: str) -> int:
    return len(text.split())


def reconcile(
    prediction: int,
    probabilities: tuple[float, float],
    text: str,
    source: str,
) -> DetectionResultDTO:
    """Build the detection result for one classified text.

    Confidence follows the predicted class rather than the larger of the two
    probabilities. Human and AI percentages are rounded independently and may
    not add up to 100.
    """
    human_probability, ai_probability = probabilities
    is_ai = prediction == 1
    confidence = round_percent(ai_probability if is_ai else human_probability)

    label = "AI-generated" if is_ai else "human-written"

    return DetectionResultDTO(
        is_ai=is_ai,
        confidence=confidence,
        prediction=prediction,
        probabilities=ProbabilitiesDTO(
            human=round_percent(human_probability),
            ai=round_percent(ai_probability),
        ),
        details=DetectionDetailsDTO(
            text_length=count_tokens(text.strip()),
            reason=f"Text classified as {label} with {confidence}% confidence",
            source=source,
        ),
    )
