import random

import pytest

from rakshavaani.degraded import AI_EXPLANATION, HUMAN_EXPLANATION, degraded_classification


class FixedRandom(random.Random):
    def __init__(self, values):
        super().__init__()
        self._values = list(values)

    def random(self):
        return self._values.pop(0)


def test_output_shape_over_many_trials():
    rng = random.Random(1234)
    counts = {"AI_GENERATED": 0, "HUMAN": 0}

    for _ in range(4000):
        result = degraded_classification(rng)
        counts[result.classification] += 1
        assert 0.85 <= result.confidence_score <= 0.99
        expected = AI_EXPLANATION if result.classification == "AI_GENERATED" else HUMAN_EXPLANATION
        assert result.explanation == expected

    assert 1700 < counts["AI_GENERATED"] < 2300
    assert 1700 < counts["HUMAN"] < 2300


def test_lower_confidence_boundary_is_exact():
    result = degraded_classification(FixedRandom([0.0, 0.0]))

    assert result.classification == "HUMAN"
    assert result.confidence_score == pytest.approx(0.85)
    assert result.explanation == HUMAN_EXPLANATION


def test_upper_confidence_boundary_stays_in_band():
    result = degraded_classification(FixedRandom([0.9, 0.999999]))

    assert result.classification == "AI_GENERATED"
    assert result.confidence_score == pytest.approx(0.99)
    assert result.confidence_score <= 0.99


def test_half_is_not_ai():
    assert degraded_classification(FixedRandom([0.5, 0.3])).classification == "HUMAN"


def test_default_random_source_works():
    assert degraded_classification().classification in {"AI_GENERATED", "HUMAN"}
