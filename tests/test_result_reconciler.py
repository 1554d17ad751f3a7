import pytest

from src.services.result_reconciler import count_tokens, reconcile, round_percent

SAMPLE_TEXT = "This is a sufficiently long test sentence for analysis."
SOURCE = "Flask ML Model"


def test_reconcile_ai_verdict():
    result = reconcile(1, (0.2, 0.8), SAMPLE_TEXT, SOURCE)

    assert result.is_ai is True
    assert result.confidence == 80
    assert result.prediction == 1
    assert (result.probabilities.human, result.probabilities.ai) == (20, 80)
    assert result.details.text_length == 9
    assert result.details.reason == "Text classified as AI-generated with 80% confidence"
    assert result.details.source == "Flask ML Model"


def test_reconcile_human_verdict_uses_human_probability():
    result = reconcile(0, (0.93, 0.07), SAMPLE_TEXT, source="Test Model")

    assert result.is_ai is False
    assert result.confidence == 93
    assert result.details.reason == "Text classified as human-written with 93% confidence"
    assert result.details.source == "Test Model"


def test_reconcile_confidence_follows_prediction_not_max():
    # The classifier may predict a class whose probability is not the larger one
    result = reconcile(1, (0.6, 0.4), SAMPLE_TEXT, SOURCE)

    assert result.is_ai is True
    assert result.confidence == 40


def test_reconcile_keeps_independent_rounding():
    result = reconcile(1, (0.125, 0.875), SAMPLE_TEXT, SOURCE)

    assert (result.probabilities.human, result.probabilities.ai) == (13, 88)
    assert result.probabilities.human + result.probabilities.ai == 101


@pytest.mark.parametrize(
    ("fraction", "expected"),
    [(0.0, 0), (1.0, 100), (0.005, 1), (0.125, 13), (0.2, 20), (0.29, 29), (0.994, 99)],
)
def test_round_percent_rounds_halves_up(fraction, expected):
    assert round_percent(fraction) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [("one", 1), ("two  words", 2), ("tabs\tand\nnewlines  here", 4), ("  padded text  ", 2)],
)
def test_count_tokens_splits_on_any_whitespace(text, expected):
    assert count_tokens(text) == expected


def test_reconcile_is_deterministic():
    assert reconcile(0, (0.51, 0.49), SAMPLE_TEXT, SOURCE) == reconcile(0, (0.51, 0.49), SAMPLE_TEXT, SOURCE)
