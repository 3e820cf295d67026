"""
NetTrust Core Data Models
==========================

Pydantic-based domain models for the NetTrust access-point detector.
These models represent scan observations, vendor records, per-device
tracking profiles, persistent attack evidence, rule verdicts and the
detection results handed to presentation layers.

Categories (device type, attack class, threat level, evidence state) are
closed enumerations so every branch over them can be checked for
exhaustiveness.

References:
    - IEEE. (2020). IEEE Std 802.11-2020: Wireless LAN Medium Access Control
      (MAC) and Physical Layer (PHY) Specifications.
    - IEEE. (2014). IEEE Std 802-2014. Section 8.2: Universal/Local bit.
    - Pydantic v2 Documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class AttackType(str, enum.Enum):
    """Verdict classes produced by the detector.

    Attributes:
        SAFE:      Legitimate network.
        EVIL_TWIN: Device impersonating a trusted network's name.
        ROGUE_AP:  Unauthorized access point not impersonating anything.
    """

    SAFE = "Safe"
    EVIL_TWIN = "Evil_Twin"
    ROGUE_AP = "Rogue_AP"

    @property
    def is_attack(self) -> bool:
        return self is not AttackType.SAFE


# Classes scored by the statistical model, in output order.
SCORED_CLASSES: tuple[AttackType, ...] = (AttackType.EVIL_TWIN, AttackType.ROGUE_AP)


class DeviceCategory(str, enum.Enum):
    """Hardware category derived from the address prefix."""

    ROUTER = "Router"
    MOBILE_PHONE = "MobilePhone"
    COMPUTER = "Computer"
    IOT_DEVICE = "IoTDevice"
    ATTACK_DEVICE = "AttackDevice"
    UNKNOWN = "Unknown"


class ThreatLevel(str, enum.Enum):
    """Ordinal threat level shown to the user, lowest first."""

    SAFE = "SAFE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Position in the ordinal scale (SAFE = 0 ... CRITICAL = 4)."""
        return list(ThreatLevel).index(self)


class EvidenceState(str, enum.Enum):
    """Persistence state of accumulated attack evidence.

    A profile without an :class:`AttackEvidence` is in the implicit
    *no evidence* state.
    """

    PROVISIONAL = "provisional"
    CONFIRMED = "confirmed"


# ---------------------------------------------------------------------------
# Address helpers
# ---------------------------------------------------------------------------


def normalize_bssid(address: str) -> str:
    """Lower-case a hardware address and use ``:`` as the octet separator."""
    return address.strip().lower().replace("-", ":")


def channel_from_frequency(frequency: int) -> int:
    """Convert a WiFi centre frequency in MHz to its channel number.

    Args:
        frequency: Centre frequency in MHz.

    Returns:
        Channel number, or 0 if the frequency is outside the 2.4/5 GHz
        channel plans.
    """
    if 2412 <= frequency <= 2484:
        if frequency == 2484:
            return 14
        return (frequency - 2407) // 5
    if 5170 <= frequency <= 5825:
        return (frequency - 5000) // 5
    return 0


# ---------------------------------------------------------------------------
# Observation
# ---------------------------------------------------------------------------


class Observation(BaseModel):
    """A single access point as reported by a wireless scan.

    Attributes:
        ssid: Network name; empty for hidden networks.
        bssid: Access point hardware address (case-insensitive key).
        frequency: Operating frequency in MHz.
        signal_dbm: Received signal strength in dBm.
        channel: Channel number; derived from *frequency* when omitted.
        capabilities: Security capability string (e.g. ``[WPA2-PSK-CCMP][ESS]``).
        timestamp: Arrival time of the observation.
    """

    model_config = ConfigDict(frozen=True)

    ssid: str = ""
    bssid: str
    frequency: int
    signal_dbm: int
    channel: int = 0
    capabilities: str = ""
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @field_validator("bssid")
    @classmethod
    def _normalize_bssid(cls, v: str) -> str:
        return normalize_bssid(v)

    @field_validator("ssid", "capabilities", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @model_validator(mode="before")
    @classmethod
    def _derive_channel(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        unset = data.get("channel") in (None, "", 0, "0")
        if unset and data.get("frequency") not in (None, ""):
            try:
                frequency = int(data["frequency"])
            except (TypeError, ValueError):
                # left for field validation to report
                return data
            data = {**data, "channel": channel_from_frequency(frequency)}
        return data

    @property
    def is_hidden(self) -> bool:
        return self.ssid == ""


# ---------------------------------------------------------------------------
# Vendor Record
# ---------------------------------------------------------------------------


class VendorRecord(BaseModel):
    """Manufacturer information for an address prefix.

    Attributes:
        vendor: Manufacturer name.
        category: Hardware category.
        trusted: Whether the manufacturer is a known legitimate router brand.
    """

    model_config = ConfigDict(frozen=True)

    vendor: str
    category: DeviceCategory = DeviceCategory.UNKNOWN
    trusted: bool = False


# ---------------------------------------------------------------------------
# Attack Evidence & Device Profile
# ---------------------------------------------------------------------------


class AttackEvidence(BaseModel):
    """Accumulated evidence that a device is performing one kind of attack.

    Attributes:
        attack_type: The attack class the evidence supports.
        total_confidence: Sum of accepted confidences.
        detection_count: Number of accepted detections of this type.
        last_seen: Time of the most recent accepted detection.
        state: Provisional until the persistence threshold is reached.
        boosted_confidence: ``min(average * confirm_boost, ceiling)``
            computed when the evidence was confirmed.
    """

    attack_type: AttackType
    total_confidence: float = 0.0
    detection_count: int = 0
    last_seen: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    state: EvidenceState = EvidenceState.PROVISIONAL
    boosted_confidence: float = 0.0

    @property
    def is_confirmed(self) -> bool:
        return self.state is EvidenceState.CONFIRMED

    @property
    def average_confidence(self) -> float:
        if self.detection_count == 0:
            return 0.0
        return self.total_confidence / self.detection_count


class DeviceProfile(BaseModel):
    """Tracking state for one access point across repeated scans.

    Attributes:
        bssid: Hardware address (profile key).
        ssid: Most recently observed network name.
        scan_count: Number of observations applied to this profile.
        rssi_history: Most recent signal strengths, oldest first.
        frequency_history: Most recent frequencies, oldest first.
        avg_rssi: Mean of *rssi_history*.
        is_baseline: Learned as trusted after repeated clean scans.
        evidence: Persistent attack evidence, ``None`` when there is none.
    """

    bssid: str
    ssid: str = ""
    scan_count: int = 0
    rssi_history: list[int] = Field(default_factory=list)
    frequency_history: list[int] = Field(default_factory=list)
    avg_rssi: float = 0.0
    is_baseline: bool = False
    evidence: Optional[AttackEvidence] = None

    @model_validator(mode="after")
    def _baseline_excludes_confirmed(self) -> DeviceProfile:
        if self.is_baseline and self.evidence is not None and self.evidence.is_confirmed:
            raise ValueError("a baseline profile cannot hold confirmed evidence")
        return self

    @property
    def is_confirmed(self) -> bool:
        return self.evidence is not None and self.evidence.is_confirmed


# ---------------------------------------------------------------------------
# Rule Verdict
# ---------------------------------------------------------------------------


class RuleVerdict(BaseModel):
    """Outcome of a classification stage (rule engine or fusion).

    Attributes:
        attack_type: Candidate verdict.
        confidence: Confidence in the verdict [0.0, 1.0].
        reasons: Human-readable reasons, in the order they were found.
    """

    attack_type: AttackType = AttackType.SAFE
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    reasons: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Detection Result
# ---------------------------------------------------------------------------


class DetectionResult(BaseModel):
    """Final classification of one observation.

    Attributes:
        network_name: SSID, or ``"<Hidden Network>"`` for hidden networks.
        bssid: Access point hardware address.
        attack_type: Final verdict.
        confidence: Final confidence [0.0, 1.0].
        is_rogue_ap: Verdict is Evil Twin or Rogue AP.
        is_threat: Threat level is above SAFE.
        threat_level: Ordinal threat level.
        probabilities: Statistical scorer distribution keyed by class value.
        signal_strength: Echo of the observed signal in dBm.
        frequency: Echo of the observed frequency in MHz.
        channel: Echo of the observed channel.
        timestamp: Arrival time of the observation.
        recommended_action: Advisory text for the user.
        is_baseline: Device is a learned trusted network.
        detection_count: Accepted detections in the current evidence.
        reasons: Ordered human-readable detection reasons.
        vendor: Human-readable device description.
    """

    network_name: str
    bssid: str
    attack_type: AttackType = AttackType.SAFE
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    is_rogue_ap: bool = False
    is_threat: bool = False
    threat_level: ThreatLevel = ThreatLevel.SAFE
    probabilities: dict[str, float] = Field(default_factory=dict)
    signal_strength: int = 0
    frequency: int = 0
    channel: int = 0
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    recommended_action: str = ""
    is_baseline: bool = False
    detection_count: int = 0
    reasons: list[str] = Field(default_factory=list)
    vendor: str = ""


HIDDEN_NETWORK_NAME = "<Hidden Network>"


# ---------------------------------------------------------------------------
# Scan Summary
# ---------------------------------------------------------------------------


class ScanSummary(BaseModel):
    """Aggregate statistics over a batch of detection results."""

    total: int = 0
    threats: int = 0
    rogue_aps: int = 0
    critical: int = 0
    baseline: int = 0
    by_attack: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_results(cls, results: list[DetectionResult]) -> ScanSummary:
        by_attack = {attack.value: 0 for attack in AttackType}
        for result in results:
            by_attack[result.attack_type.value] += 1
        return cls(
            total=len(results),
            threats=sum(1 for r in results if r.is_threat),
            rogue_aps=sum(1 for r in results if r.is_rogue_ap),
            critical=sum(1 for r in results if r.threat_level is ThreatLevel.CRITICAL),
            baseline=sum(1 for r in results if r.is_baseline),
            by_attack=by_attack,
        )
