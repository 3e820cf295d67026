"""
Unit tests for feature extraction, standardisation and the statistical scorer.
"""

import math

import pytest

from nettrust.analyzers.features import FeatureExtractor, derive_feature
from nettrust.analyzers.scaler import Standardizer
from nettrust.analyzers.scorer import StatisticalScorer, band_score
from nettrust.core.models import AttackType
from shared.math_utils import softmax, zscore_standardize

from tests.helpers import FEATURE_NAMES, OPEN, UNKNOWN, obs


class TestFeatureExtractor:
    """Tests for FeatureExtractor."""

    def test_vector_matches_configured_order(self):
        """One value per name, in the configured order."""
        extractor = FeatureExtractor(FEATURE_NAMES)
        vector = extractor.extract(obs(UNKNOWN, signal=-52, frequency=2437))

        assert len(vector) == len(extractor) == len(FEATURE_NAMES)
        assert vector == [100.0, -52.0, 6.0, 24.0, 1.0, 0.0]

    def test_high_band_values(self):
        """5 GHz observations get the higher rate and PHY values."""
        o = obs(UNKNOWN, frequency=5180, capabilities=OPEN)
        assert derive_feature("radiotap.datarate", o) == 54.0
        assert derive_feature("wlan_radio.phy", o) == 5.0
        assert derive_feature("radiotap.channel.flags.cck", o) == 0.0
        assert derive_feature("wlan_radio.channel", o) == 36.0
        assert derive_feature("wlan.rsn.version", o) == 0.0

    def test_low_band_values(self):
        o = obs(UNKNOWN, frequency=2412)
        assert derive_feature("wlan_radio.data_rate", o) == 24.0
        assert derive_feature("wlan_radio.phy", o) == 4.0
        assert derive_feature("radiotap.channel.flags.cck", o) == 1.0

    def test_beacon_constants(self):
        o = obs(UNKNOWN)
        assert derive_feature("frame.time_delta", o) == 0.0
        assert derive_feature("radiotap.length", o) == 24.0
        assert derive_feature("wlan.duration", o) == 44.0
        assert derive_feature("wlan.fc.subtype", o) == 8.0
        assert derive_feature("wlan_radio.duration", o) == 44.0

    def test_upper_layers_and_unknown_names_are_zero(self):
        o = obs(UNKNOWN)
        for name in ("arp.opcode", "ip.ttl", "udp.length", "dns.qry", "http.request", "no.such.field"):
            assert derive_feature(name, o) == 0.0

    def test_empty_feature_list(self):
        assert FeatureExtractor([]).extract(obs(UNKNOWN)) == []


class TestStandardizer:
    """Tests for Standardizer and zscore_standardize."""

    def test_standardize(self):
        scaler = Standardizer([1.0, 2.0], [2.0, 4.0])
        assert scaler.standardize([3.0, 10.0]) == pytest.approx([1.0, 2.0])

    def test_zero_scale_is_only_centred(self):
        scaler = Standardizer([1.0, 5.0], [0.0, 1.0])
        assert scaler.standardize([4.0, 5.0]) == pytest.approx([3.0, 0.0])

    def test_parameter_mismatch_raises(self):
        with pytest.raises(ValueError):
            Standardizer([0.0, 1.0], [1.0])

    def test_vector_mismatch_raises(self):
        with pytest.raises(ValueError):
            Standardizer([0.0, 1.0], [1.0, 1.0]).standardize([1.0])

    def test_helper_returns_plain_floats(self):
        result = zscore_standardize([2.0], [1.0], [1.0])
        assert result == [1.0]
        assert isinstance(result[0], float)


class TestStatisticalScorer:
    """Tests for StatisticalScorer banding and softmax."""

    def test_distribution_sums_to_one(self):
        scorer = StatisticalScorer()
        for rssi, freq in ((-30, 2437), (-55, 5180), (-90, 2412), (-45, 5500)):
            dist = scorer.score([], rssi, freq)
            assert set(dist) == {AttackType.EVIL_TWIN, AttackType.ROGUE_AP}
            assert sum(dist.values()) == pytest.approx(1.0)

    def test_raw_bands(self):
        scorer = StatisticalScorer()
        assert scorer.raw_scores(-35, 2437) == {
            AttackType.EVIL_TWIN: 0.55, AttackType.ROGUE_AP: 0.50,
        }
        assert scorer.raw_scores(-52, 5180) == {
            AttackType.EVIL_TWIN: 0.25, AttackType.ROGUE_AP: 0.40,
        }
        assert scorer.raw_scores(-90, 2437) == {
            AttackType.EVIL_TWIN: 0.25, AttackType.ROGUE_AP: 0.25,
        }

    def test_strong_signal_favours_evil_twin(self):
        dist = StatisticalScorer().score([], -30, 2437)
        expected = 1.0 / (1.0 + math.exp(-0.05))
        assert dist[AttackType.EVIL_TWIN] == pytest.approx(expected)

    def test_scorer_never_reaches_acceptance_thresholds(self):
        """Signal bands alone cannot push a class past 0.60."""
        scorer = StatisticalScorer()
        for rssi in range(-100, -20, 5):
            for freq in (2412, 2437, 5180, 5745):
                assert max(scorer.score([], rssi, freq).values()) < 0.60

    def test_band_fallback(self):
        assert band_score((), -50, 2437) == 0.25

    def test_softmax_is_stable_for_large_inputs(self):
        probs = softmax([1000.0, 1000.0])
        assert list(probs) == pytest.approx([0.5, 0.5])
