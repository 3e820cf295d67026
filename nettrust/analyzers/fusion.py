"""
NetTrust Decision Fusion
=========================

Combines the rule engine's verdict with the statistical scorer's
distribution into one candidate verdict, then applies the per-class
acceptance threshold.

    chosen     = rule type        if rule confidence > max(S)
                 argmax(S)        otherwise
    confidence = max(rule confidence, S[chosen])

A verdict below its class threshold is replaced by Safe 0.0 with no
reasons, unless the device is a learned baseline (baseline dampening is
applied later by the evidence tracker).
"""

from __future__ import annotations

from typing import Mapping, Optional

from shared.config import DetectionConfig
from shared.logger import TrustLogger

from nettrust.core.models import AttackType, RuleVerdict

logger = TrustLogger("analyzers.fusion")

# Scorer confidence above which its contribution is reported as a reason.
_REPORTABLE_SCORE = 0.5


class DecisionFusion:
    """Rule/scorer fusion with threshold gating.

    Args:
        config: Detection settings supplying the class thresholds.
    """

    def __init__(self, config: Optional[DetectionConfig] = None) -> None:
        self._config = config or DetectionConfig()

    def threshold_for(self, attack: AttackType) -> float:
        if attack is AttackType.EVIL_TWIN:
            return self._config.evil_twin_threshold
        if attack is AttackType.ROGUE_AP:
            return self._config.rogue_ap_threshold
        return self._config.default_threshold

    def fuse(
        self,
        rule: RuleVerdict,
        distribution: Mapping[AttackType, float],
        is_baseline: bool,
    ) -> RuleVerdict:
        """Fuse *rule* with the scorer *distribution*.

        Args:
            rule: Verdict from the rule engine.
            distribution: Scorer probabilities over the attack classes.
            is_baseline: Whether the device is a learned trusted network.

        Returns:
            The accepted verdict, or Safe 0.0 when rejected.
        """
        reasons = list(rule.reasons)
        if distribution:
            scorer_attack = max(distribution, key=lambda a: distribution[a])
            scorer_conf = distribution[scorer_attack]
        else:
            scorer_attack, scorer_conf = AttackType.SAFE, 0.0

        if rule.confidence > scorer_conf:
            chosen = rule.attack_type
        else:
            chosen = scorer_attack
            if scorer_conf > rule.confidence and scorer_conf > _REPORTABLE_SCORE:
                reasons.append(
                    f"Statistical model detected with {scorer_conf * 100:.0f}% confidence"
                )

        confidence = max(rule.confidence, distribution.get(chosen, 0.0))
        threshold = self.threshold_for(chosen)

        if confidence < threshold and not is_baseline:
            logger.debug(
                "Rejected %s at %.2f (threshold %.2f)",
                chosen.value, confidence, threshold,
            )
            return RuleVerdict(attack_type=AttackType.SAFE, confidence=0.0)

        return RuleVerdict(attack_type=chosen, confidence=confidence, reasons=reasons)
