"""Tests for fusing binary detector and heuristic results."""

import pytest
from hypothesis import given, strategies as st

from antique_identifier.classifier import BinaryResult
from antique_identifier.fusion import CombinerConfig, FusionPolicy, ResultCombiner, Verdict
from antique_identifier.heuristics import HeuristicResult

confidences = st.floats(min_value=0.0, max_value=1.0)


def heuristic(confidence=0.7, is_antique=True, reasons=("Wood tones and patina suggest age.",)):
    return HeuristicResult(is_antique=is_antique, confidence=confidence, reasons=reasons)


class TestWithoutBinary:
    def test_heuristic_passes_through_unchanged(self):
        h = heuristic(0.42, False, ("a", "b"))
        verdict = ResultCombiner().combine(None, h)

        assert verdict == Verdict(is_antique=False, confidence=0.42, reasons=("a", "b"))

    @given(confidence=confidences, is_antique=st.booleans())
    def test_any_heuristic_passes_through(self, confidence, is_antique):
        h = heuristic(confidence, is_antique, ("reason",))
        verdict = ResultCombiner().combine(None, h)

        assert verdict.confidence == h.confidence
        assert verdict.is_antique == h.is_antique
        assert verdict.reasons == h.reasons


class TestHighConfidenceBinary:
    @given(h=confidences)
    def test_confident_antique_verdict(self, h):
        verdict = ResultCombiner().combine(BinaryResult(True, 0.9), heuristic(h))

        assert verdict.confidence == pytest.approx(min(0.9 * 0.9 + 0.1 * h, 1.0))
        assert verdict.is_antique is True

    def test_confident_modern_verdict_is_authoritative(self):
        verdict = ResultCombiner().combine(BinaryResult(False, 0.95), heuristic(0.2, is_antique=True))

        assert verdict.is_antique is False
        assert verdict.confidence == pytest.approx(0.9 * 0.95 + 0.1 * 0.8)

    def test_model_reason_prepended(self):
        h = heuristic(0.5, reasons=("first", "second"))
        verdict = ResultCombiner().combine(BinaryResult(True, 0.85), h)

        assert len(verdict.reasons) == 3
        assert "highly confident" in verdict.reasons[0]
        assert "antique" in verdict.reasons[0]
        assert verdict.reasons[1:] == ("first", "second")

    def test_modern_reason_wording(self):
        verdict = ResultCombiner().combine(BinaryResult(False, 0.99), heuristic())
        assert "modern" in verdict.reasons[0]


class TestMediumConfidenceBinary:
    def test_modern_verdict_is_penalised(self):
        verdict = ResultCombiner().combine(BinaryResult(False, 0.5), heuristic(0.9))

        assert verdict.confidence == pytest.approx(0.528)
        assert verdict.is_antique is True

    def test_antique_verdict_blend(self):
        verdict = ResultCombiner().combine(BinaryResult(True, 0.6), heuristic(0.3))

        assert verdict.confidence == pytest.approx(0.6 * 0.6 + 0.4 * 0.3)
        assert verdict.is_antique is True

    def test_blend_below_half_is_not_antique(self):
        verdict = ResultCombiner().combine(BinaryResult(True, 0.4), heuristic(0.5))

        assert verdict.confidence == pytest.approx(0.44)
        assert verdict.is_antique is False

    def test_cutoff_itself_is_medium_regime(self):
        verdict = ResultCombiner().combine(BinaryResult(False, 0.8), heuristic(0.9))

        assert verdict.confidence == pytest.approx((0.6 * 0.8 + 0.4 * 0.9) * 0.8)
        assert verdict.is_antique is True
        assert "suggests a modern piece" in verdict.reasons[0]

    def test_model_reason_prepended(self):
        h = heuristic(0.5, reasons=("only",))
        verdict = ResultCombiner().combine(BinaryResult(True, 0.55), h)

        assert verdict.reasons[0] == "Model suggests an antique (55% confidence)."
        assert verdict.reasons[1:] == ("only",)


class TestPolicies:
    def test_plain_blend_never_overrides(self):
        combiner = ResultCombiner(policy=FusionPolicy.PLAIN_BLEND)
        verdict = combiner.combine(BinaryResult(False, 0.95), heuristic(0.9))

        assert verdict.confidence == pytest.approx((0.6 * 0.95 + 0.4 * 0.9) * 0.8)
        assert verdict.is_antique is True

    def test_max_confidence_prefers_larger(self):
        combiner = ResultCombiner(policy=FusionPolicy.MAX_CONFIDENCE)
        h = heuristic(0.3, is_antique=False, reasons=("x",))

        verdict = combiner.combine_max(h, 0.7)

        assert verdict.confidence == 0.7
        assert verdict.is_antique is False
        assert verdict.reasons == ("x",)

    @pytest.mark.parametrize("binary", [None, BinaryResult(True, 0.9)])
    def test_max_confidence_rejects_blending(self, binary):
        combiner = ResultCombiner(policy=FusionPolicy.MAX_CONFIDENCE)
        with pytest.raises(ValueError, match="combine_max"):
            combiner.combine(binary, heuristic())

    def test_max_confidence_without_labels(self):
        verdict = ResultCombiner().combine_max(heuristic(0.3), None)
        assert verdict.confidence == 0.3

    def test_custom_constants(self):
        config = CombinerConfig(high_confidence_cutoff=0.95, binary_weight=0.5, heuristic_weight=0.5)
        verdict = ResultCombiner(config).combine(BinaryResult(True, 0.9), heuristic(0.5))
        assert verdict.confidence == pytest.approx(0.7)


class TestInvariants:
    @given(
        binary_confidence=confidences,
        binary_antique=st.booleans(),
        h=confidences,
        policy=st.sampled_from([FusionPolicy.OVERRIDE_BLEND, FusionPolicy.PLAIN_BLEND]),
    )
    def test_confidence_in_unit_range(self, binary_confidence, binary_antique, h, policy):
        verdict = ResultCombiner(policy=policy).combine(BinaryResult(binary_antique, binary_confidence), heuristic(h))
        assert 0.0 <= verdict.confidence <= 1.0

    @given(binary_confidence=st.floats(min_value=0.0, max_value=0.8), binary_antique=st.booleans(), h=confidences)
    def test_medium_regime_verdict_follows_threshold(self, binary_confidence, binary_antique, h):
        verdict = ResultCombiner().combine(BinaryResult(binary_antique, binary_confidence), heuristic(h))
        assert verdict.is_antique == (verdict.confidence > 0.5)
