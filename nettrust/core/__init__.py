"""
NetTrust Core
==============

Domain models and the evidence tracker. The detection engine lives in
:mod:`nettrust.core.engine`; it is not re-exported here because it
depends on the analyzers, which themselves import these models.
"""

from nettrust.core.models import (
    AttackEvidence,
    AttackType,
    DetectionResult,
    DeviceCategory,
    DeviceProfile,
    EvidenceState,
    Observation,
    RuleVerdict,
    ScanSummary,
    ThreatLevel,
    VendorRecord,
)
from nettrust.core.tracker import EvidenceTracker, SsidIndex

__all__ = [
    "EvidenceTracker",
    "SsidIndex",
    "AttackEvidence",
    "AttackType",
    "DetectionResult",
    "DeviceCategory",
    "DeviceProfile",
    "EvidenceState",
    "Observation",
    "RuleVerdict",
    "ScanSummary",
    "ThreatLevel",
    "VendorRecord",
]
