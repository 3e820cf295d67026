"""
NetTrust Statistical Scorer
============================

Lightweight stand-in for the offline-trained classifier: each attack
class receives a raw score from banded thresholds on the raw (not
standardised) signal strength and frequency, and the raw scores are
normalised with softmax into a probability distribution over
{Evil_Twin, Rogue_AP}.

The bands are deliberately conservative. Strong signal alone is weak
evidence, so the scorer never exceeds the acceptance thresholds on its
own and defers to the rule engine for confident verdicts.

Reference:
    Bishop, C. M. (2006). Pattern Recognition and Machine Learning.
    Springer. Section 4.3.4.
"""

from __future__ import annotations

from typing import Callable, Sequence

from shared.math_utils import softmax

from nettrust.core.models import SCORED_CLASSES, AttackType

# (predicate(rssi, frequency), raw score); first matching band wins.
_Band = tuple[Callable[[int, int], bool], float]

_EVIL_TWIN_BANDS: tuple[_Band, ...] = (
    (lambda rssi, f: f < 3000 and rssi > -40, 0.55),
    (lambda rssi, f: f < 3000 and rssi > -50, 0.45),
    (lambda rssi, f: f < 3000 and rssi > -60, 0.35),
    (lambda rssi, f: rssi > -40, 0.45),
)

_ROGUE_AP_BANDS: tuple[_Band, ...] = (
    (lambda rssi, f: rssi > -45, 0.50),
    (lambda rssi, f: rssi > -60, 0.40),
    (lambda rssi, f: f >= 5000 and rssi > -55, 0.45),
)

_FALLBACK_SCORE = 0.25

_BANDS: dict[AttackType, tuple[_Band, ...]] = {
    AttackType.EVIL_TWIN: _EVIL_TWIN_BANDS,
    AttackType.ROGUE_AP: _ROGUE_AP_BANDS,
}


def band_score(bands: Sequence[_Band], rssi: int, frequency: int) -> float:
    """Raw score of the first band whose predicate holds."""
    for predicate, score in bands:
        if predicate(rssi, frequency):
            return score
    return _FALLBACK_SCORE


class StatisticalScorer:
    """Scores an observation against the attack classes.

    Usage::

        scorer = StatisticalScorer()
        dist = scorer.score(standardized, rssi=-45, frequency=2437)
        dist[AttackType.EVIL_TWIN] + dist[AttackType.ROGUE_AP]   # 1.0
    """

    def raw_scores(self, rssi: int, frequency: int) -> dict[AttackType, float]:
        return {
            attack: band_score(_BANDS[attack], rssi, frequency)
            for attack in SCORED_CLASSES
        }

    def score(
        self,
        standardized: Sequence[float],
        rssi: int,
        frequency: int,
    ) -> dict[AttackType, float]:
        """Probability distribution over the scored classes.

        Args:
            standardized: Standardised feature vector. The banded scorer
                keys on raw signal values only; the vector is accepted so
                a fitted model can replace the bands behind the same call.
            rssi: Raw signal strength in dBm.
            frequency: Raw frequency in MHz.
        """
        raw = self.raw_scores(rssi, frequency)
        probabilities = softmax(list(raw.values()))
        return {
            attack: float(p) for attack, p in zip(raw.keys(), probabilities)
        }
