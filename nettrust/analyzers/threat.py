"""
NetTrust Threat Classifier
===========================

Maps a final (attack type, confidence, baseline) triple onto the ordinal
threat scale and the advisory text shown next to each network.

Scale::

    baseline and confidence < 0.70  -> SAFE
    confidence < 0.40               -> SAFE
    confidence < 0.60               -> LOW
    confidence < 0.75               -> HIGH (attack) / MEDIUM
    confidence < 0.85               -> CRITICAL (attack) / HIGH
    otherwise                       -> CRITICAL
"""

from __future__ import annotations

from nettrust.core.models import AttackType, ThreatLevel

_BASELINE_OVERRIDE = 0.70


def classify_threat(
    confidence: float,
    attack: AttackType,
    is_baseline: bool,
    baseline_override: float = _BASELINE_OVERRIDE,
) -> ThreatLevel:
    """Derive the threat level for a final verdict."""
    if is_baseline and confidence < baseline_override:
        return ThreatLevel.SAFE
    if confidence < 0.40:
        return ThreatLevel.SAFE
    if confidence < 0.60:
        return ThreatLevel.LOW
    if confidence < 0.75:
        return ThreatLevel.HIGH if attack.is_attack else ThreatLevel.MEDIUM
    if confidence < 0.85:
        return ThreatLevel.CRITICAL if attack.is_attack else ThreatLevel.HIGH
    return ThreatLevel.CRITICAL


def recommended_action(
    attack: AttackType,
    level: ThreatLevel,
    is_baseline: bool,
) -> str:
    """Advisory text for the user."""
    if is_baseline:
        return "Trusted network (learned from 3+ scans)"
    if level is ThreatLevel.SAFE:
        return "Network appears safe. Monitoring..."
    if attack is AttackType.EVIL_TWIN:
        if level is ThreatLevel.CRITICAL:
            return "CRITICAL: Evil Twin Attack! DO NOT CONNECT!"
        if level is ThreatLevel.HIGH:
            return "HIGH RISK: Suspected Evil Twin."
        return "Possible Evil Twin. Verify network."
    if attack is AttackType.ROGUE_AP:
        return "UNAUTHORIZED ACCESS POINT! Do not connect."
    return "Potential threat."
