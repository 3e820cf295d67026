"""
NetTrust Evidence Tracker
==========================

Per-device tracking state that stabilises decisions across repeated scans
of the same access point.

Each hardware address owns a :class:`DeviceProfile` holding bounded
signal/frequency histories, a sticky *baseline* flag (learned trusted
network) and optional :class:`AttackEvidence`. Evidence moves through::

    no evidence --accepted verdict--> Provisional(1)
    Provisional(n) --same type--> Provisional(n+1) / Confirmed at n >= 2
    Provisional / Confirmed --different type--> Provisional(1)
    no evidence / Provisional --clean scan, scan_count >= 3--> baseline

Confirmation revokes the baseline flag, and promotion to baseline is
blocked while evidence is confirmed, so the two never coexist.

Concurrency: observations for one address are serialised through a
per-address lock from :meth:`EvidenceTracker.lock_for`; the lock registry
and the SSID index each carry their own lock. Different addresses may be
processed in parallel.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

from shared.config import DetectionConfig
from shared.logger import TrustLogger
from shared.math_utils import mean_of

from nettrust.core.models import (
    AttackEvidence,
    AttackType,
    DeviceProfile,
    EvidenceState,
    Observation,
    RuleVerdict,
)

logger = TrustLogger("core.tracker")


# ---------------------------------------------------------------------------
# SSID Index
# ---------------------------------------------------------------------------


class SsidIndex:
    """Network name -> insertion-ordered set of addresses broadcasting it.

    Empty names are never indexed. The index only grows until cleared.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # dict keys preserve insertion order
        self._index: dict[str, dict[str, None]] = {}

    def add(self, ssid: str, bssid: str) -> None:
        if not ssid:
            return
        with self._lock:
            self._index.setdefault(ssid, {})[bssid] = None

    def addresses(self, ssid: str) -> list[str]:
        with self._lock:
            return list(self._index.get(ssid, ()))

    def peers(self, ssid: str, exclude: str) -> list[str]:
        """Addresses broadcasting *ssid* other than *exclude*."""
        return [addr for addr in self.addresses(ssid) if addr != exclude]

    def clear(self) -> None:
        with self._lock:
            self._index.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._index)


# ---------------------------------------------------------------------------
# Evidence Tracker
# ---------------------------------------------------------------------------


class EvidenceTracker:
    """Profile store and evidence state machine.

    Usage::

        tracker = EvidenceTracker(DetectionConfig())
        with tracker.lock_for(obs.bssid):
            profile = tracker.record(obs)
            final = tracker.apply_verdict(profile, fused, 0.65, obs.timestamp)
    """

    def __init__(self, config: Optional[DetectionConfig] = None) -> None:
        self._config = config or DetectionConfig()
        self._profiles: dict[str, DeviceProfile] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()
        self._ssids = SsidIndex()

    # ------------------------------------------------------------------ #
    #  Locking
    # ------------------------------------------------------------------ #

    def lock_for(self, bssid: str) -> threading.Lock:
        """Lock serialising all updates of one address."""
        with self._registry_lock:
            lock = self._locks.get(bssid)
            if lock is None:
                lock = threading.Lock()
                self._locks[bssid] = lock
            return lock

    # ------------------------------------------------------------------ #
    #  Queries
    # ------------------------------------------------------------------ #

    def profile(self, bssid: str) -> Optional[DeviceProfile]:
        with self._registry_lock:
            return self._profiles.get(bssid)

    def is_baseline(self, bssid: str) -> bool:
        profile = self.profile(bssid)
        return profile is not None and profile.is_baseline

    def ssid_peers(self, ssid: str, exclude: str) -> list[str]:
        return self._ssids.peers(ssid, exclude)

    def profiles(self) -> list[DeviceProfile]:
        with self._registry_lock:
            return list(self._profiles.values())

    def baseline_profiles(self) -> list[DeviceProfile]:
        return [p for p in self.profiles() if p.is_baseline]

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._profiles)

    # ------------------------------------------------------------------ #
    #  Updates (caller holds lock_for(bssid))
    # ------------------------------------------------------------------ #

    def record(self, obs: Observation) -> DeviceProfile:
        """Fold *obs* into its device profile, creating it on first sight."""
        with self._registry_lock:
            profile = self._profiles.get(obs.bssid)
            if profile is None:
                profile = DeviceProfile(bssid=obs.bssid, ssid=obs.ssid)
                self._profiles[obs.bssid] = profile
                logger.debug("New AP: %s (%s)", obs.ssid, obs.bssid)

        size = self._config.history_size
        profile.ssid = obs.ssid
        profile.scan_count += 1
        profile.rssi_history = (profile.rssi_history + [obs.signal_dbm])[-size:]
        profile.frequency_history = (profile.frequency_history + [obs.frequency])[-size:]
        profile.avg_rssi = mean_of(profile.rssi_history)

        self._ssids.add(obs.ssid, obs.bssid)
        return profile

    def apply_verdict(
        self,
        profile: DeviceProfile,
        verdict: RuleVerdict,
        threshold: float,
        timestamp: datetime,
    ) -> RuleVerdict:
        """Advance the evidence state machine and return the final verdict.

        Args:
            profile: Profile already updated with the current observation.
            verdict: Fused verdict for the observation.
            threshold: Acceptance threshold of the verdict's class.
            timestamp: Observation time, recorded as ``last_seen``.

        Returns:
            The verdict after persistent-evidence substitution and
            baseline dampening.
        """
        cfg = self._config
        attack = verdict.attack_type
        confidence = verdict.confidence
        reasons = list(verdict.reasons)

        if attack.is_attack and confidence >= threshold:
            evidence = profile.evidence
            if evidence is None or evidence.attack_type is not attack:
                profile.evidence = AttackEvidence(
                    attack_type=attack,
                    total_confidence=confidence,
                    detection_count=1,
                    last_seen=timestamp,
                )
                logger.debug(
                    "New attack evidence: %s -> %s (%.0f%%)",
                    profile.ssid, attack.value, confidence * 100,
                )
            else:
                evidence.detection_count += 1
                evidence.total_confidence += confidence
                evidence.last_seen = timestamp
                if evidence.detection_count >= cfg.persistence_threshold:
                    self._confirm(profile, evidence)
        elif (
            profile.scan_count >= cfg.baseline_threshold
            and not profile.is_baseline
            and not profile.is_confirmed
        ):
            profile.is_baseline = True
            profile.evidence = None
            logger.info("Baseline learned: %s (%s)", profile.ssid, profile.bssid)

        if profile.is_confirmed:
            evidence = profile.evidence
            attack = evidence.attack_type
            confidence = min(
                evidence.average_confidence * cfg.sustain_boost,
                cfg.confidence_ceiling,
            )

        if profile.is_baseline and attack is AttackType.SAFE:
            confidence = 0.0
        elif profile.is_baseline and confidence < cfg.baseline_override:
            logger.debug("Baseline AP with weak attack signal ignored: %s", profile.bssid)
            attack, confidence, reasons = AttackType.SAFE, 0.0, []

        return RuleVerdict(attack_type=attack, confidence=confidence, reasons=reasons)

    def _confirm(self, profile: DeviceProfile, evidence: AttackEvidence) -> None:
        cfg = self._config
        first = not evidence.is_confirmed
        evidence.state = EvidenceState.CONFIRMED
        evidence.boosted_confidence = min(
            evidence.average_confidence * cfg.confirm_boost,
            cfg.confidence_ceiling,
        )
        if profile.is_baseline:
            profile.is_baseline = False
            logger.warning(
                "Baseline revoked: %s (%s) confirmed as %s",
                profile.ssid, profile.bssid, evidence.attack_type.value,
            )
        if first:
            logger.warning(
                "Confirmed attack: %s -> %s (seen %dx)",
                profile.ssid, evidence.attack_type.value, evidence.detection_count,
            )

    def clear(self) -> None:
        """Drop every profile and SSID index entry.

        Per-address locks are kept: a detection still holding one must
        keep excluding later detections of the same address.
        """
        with self._registry_lock:
            self._profiles.clear()
        self._ssids.clear()
        logger.info("Tracking state cleared")
