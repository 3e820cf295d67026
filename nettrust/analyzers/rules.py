"""
NetTrust Rule Engine
=====================

Ordered heuristics combining device fingerprinting (vendor directory),
SSID duplication and signal/security characteristics. Rules are evaluated
top to bottom and the first rule that returns a verdict wins; later rules
are not consulted.

Rule order:
    1. Attack hardware / reserved attack-tool prefix   -> Evil_Twin 0.95
    2. Legitimate router brand                          -> Safe (0.30 mesh / 0.0)
    3. Mobile phone hotspot                             -> Rogue_AP 0.65
    4. Duplicate SSID of a learned (baseline) network   -> Evil_Twin 0.92
       (duplicate without a learned peer only adds information)
    5. Hidden network with very strong signal           -> Rogue_AP 0.70
    6. Locally administered address                     -> Rogue_AP 0.60
    7. Generic honeypot-style SSID                      -> Rogue_AP 0.60
    8. Open network with strong signal                  -> Rogue_AP 0.55
    9. Extremely strong signal from unknown vendor      -> Rogue_AP 0.50

References:
    - Roth, V., Polak, W., Rieffel, E., & Thea, T. (2008). Simple and
      Effective Defense Against Evil Twin Access Points. WiSec '08.
    - Bahl, P. et al. (2006). Enhancing the Security of Corporate Wi-Fi
      Networks Using DAIR. MobiSys '06.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from shared.logger import TrustLogger

from nettrust.analyzers.vendor import VendorDirectory, is_locally_administered
from nettrust.core.models import (
    AttackType,
    DeviceCategory,
    Observation,
    RuleVerdict,
    VendorRecord,
)

if TYPE_CHECKING:
    from nettrust.core.tracker import EvidenceTracker

logger = TrustLogger("analyzers.rules")


# Address prefixes used by default firmware of common attack tools.
ATTACK_TOOL_PREFIXES: tuple[str, ...] = (
    "de:ad:", "be:ef:", "ca:fe:", "ba:be:", "12:34:56:", "aa:bb:cc:",
)

DEFAULT_HOTSPOT_MARKERS: tuple[str, ...] = (
    "iphone", "samsung", "pixel", "oneplus", "'s phone", "'s iphone",
)

SUSPICIOUS_SSID_WORDS: tuple[str, ...] = (
    "free", "public", "guest", "open", "wifi", "hotel", "airport",
)

SUSPICIOUS_SSID_CONFIDENCE = 0.60


def is_attack_tool_address(address: str) -> bool:
    return address.lower().startswith(ATTACK_TOOL_PREFIXES)


def is_default_hotspot_name(ssid: str) -> bool:
    lower = ssid.lower()
    return any(marker in lower for marker in DEFAULT_HOTSPOT_MARKERS)


def suspicious_ssid_score(ssid: str) -> float:
    """Confidence that *ssid* is a generic honeypot-style name.

    A word matches when it is the whole name, or is contained in a name
    without ``_`` or ``-`` delimiters ("FreeAirportWiFi" matches,
    "open_office" does not).
    """
    if not ssid:
        return 0.0
    lower = ssid.lower()
    delimited = "_" in lower or "-" in lower
    for word in SUSPICIOUS_SSID_WORDS:
        if lower == word or (word in lower and not delimited):
            return SUSPICIOUS_SSID_CONFIDENCE
    return 0.0


def is_open_network(capabilities: str) -> bool:
    upper = capabilities.upper()
    return "WPA" not in upper and "WEP" not in upper


@dataclass
class _RuleContext:
    """Inputs shared by every rule for one evaluation."""

    obs: Observation
    record: VendorRecord
    device: str
    peers: list[str]
    learned_peers: list[str]
    reasons: list[str] = field(default_factory=list)

    def verdict(self, attack: AttackType, confidence: float) -> RuleVerdict:
        return RuleVerdict(
            attack_type=attack, confidence=confidence, reasons=list(self.reasons)
        )


class RuleEngine:
    """First-match rule evaluation.

    The engine reads tracker state (SSID peers and their baseline flags)
    but never mutates it, so evaluating the same observation against the
    same state always yields the same verdict.

    Usage::

        engine = RuleEngine(VendorDirectory())
        verdict = engine.evaluate(observation, tracker)
    """

    def __init__(self, vendors: Optional[VendorDirectory] = None) -> None:
        self._vendors = vendors or VendorDirectory()
        self._rules: tuple[Callable[[_RuleContext], Optional[RuleVerdict]], ...] = (
            self._attack_hardware,
            self._legitimate_router,
            self._mobile_hotspot,
            self._duplicate_ssid,
            self._hidden_strong_signal,
            self._local_address,
            self._suspicious_ssid,
            self._open_strong_signal,
            self._unknown_strong_signal,
        )

    @property
    def vendors(self) -> VendorDirectory:
        return self._vendors

    def evaluate(self, obs: Observation, tracker: EvidenceTracker) -> RuleVerdict:
        """Run the rules in order and return the first verdict.

        Args:
            obs: Observation being classified; the tracker must already
                have recorded it.
            tracker: Source of SSID duplicates and baseline flags.

        Returns:
            The first rule's verdict, or Safe 0.0 carrying any
            informational reasons gathered on the way.
        """
        peers = tracker.ssid_peers(obs.ssid, exclude=obs.bssid) if obs.ssid else []
        ctx = _RuleContext(
            obs=obs,
            record=self._vendors.lookup(obs.bssid),
            device=self._vendors.describe(obs.bssid),
            peers=peers,
            learned_peers=[p for p in peers if tracker.is_baseline(p)],
        )
        logger.debug("Device: %s (%s) -> %s", obs.ssid, obs.bssid, ctx.device)

        for rule in self._rules:
            verdict = rule(ctx)
            if verdict is not None:
                return verdict
        return ctx.verdict(AttackType.SAFE, 0.0)

    # ------------------------------------------------------------------ #
    #  Rules
    # ------------------------------------------------------------------ #

    def _attack_hardware(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        if ctx.record.category is not DeviceCategory.ATTACK_DEVICE and not is_attack_tool_address(ctx.obs.bssid):
            return None
        ctx.reasons.append(f"ATTACK HARDWARE DETECTED: {ctx.device}")
        ctx.reasons.append("Known device used for WiFi attacks")
        logger.warning("Attack device: %s -> %s", ctx.obs.bssid, ctx.device)
        return ctx.verdict(AttackType.EVIL_TWIN, 0.95)

    def _legitimate_router(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        if not (ctx.record.category is DeviceCategory.ROUTER and ctx.record.trusted):
            return None
        if ctx.learned_peers:
            ctx.reasons.append(f"Duplicate SSID detected: '{ctx.obs.ssid}'")
            ctx.reasons.append(f"Device: {ctx.device}")
            ctx.reasons.append("May be legitimate mesh network or range extender")
            return ctx.verdict(AttackType.SAFE, 0.30)
        return ctx.verdict(AttackType.SAFE, 0.0)

    def _mobile_hotspot(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        if ctx.record.category is not DeviceCategory.MOBILE_PHONE:
            return None
        ctx.reasons.append(f"Mobile Hotspot detected: {ctx.device}")
        ctx.reasons.append("Personal hotspots may be legitimate or unauthorized")
        if is_default_hotspot_name(ctx.obs.ssid):
            ctx.reasons.append("Default hotspot name pattern detected")
        return ctx.verdict(AttackType.ROGUE_AP, 0.65)

    def _duplicate_ssid(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        if not ctx.peers:
            return None
        if ctx.learned_peers:
            ctx.reasons.append("EVIL TWIN ATTACK: Duplicate SSID of trusted network")
            ctx.reasons.append(f"Original network: {ctx.learned_peers[0]}")
            ctx.reasons.append(f"Impersonating device: {ctx.device}")
            logger.warning(
                "Evil twin: %s duplicating learned SSID '%s'", ctx.obs.bssid, ctx.obs.ssid
            )
            return ctx.verdict(AttackType.EVIL_TWIN, 0.92)
        # No learned peer yet: informational only, keep evaluating.
        ctx.reasons.append(f"Multiple access points with same SSID: '{ctx.obs.ssid}'")
        ctx.reasons.append("Possible mesh network or evil twin")
        return None

    def _hidden_strong_signal(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        obs = ctx.obs
        if not ((obs.ssid == "" or "Hidden" in obs.ssid) and obs.signal_dbm > -40):
            return None
        ctx.reasons.append(f"Hidden network with very strong signal ({obs.signal_dbm}dBm)")
        ctx.reasons.append(f"Device: {ctx.device}")
        return ctx.verdict(AttackType.ROGUE_AP, 0.70)

    def _local_address(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        if not is_locally_administered(ctx.obs.bssid) or self._vendors.is_legitimate_router(ctx.obs.bssid):
            return None
        ctx.reasons.append("Locally administered (spoofed) MAC address")
        ctx.reasons.append("MAC may be manually configured or randomized")
        return ctx.verdict(AttackType.ROGUE_AP, 0.60)

    def _suspicious_ssid(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        score = suspicious_ssid_score(ctx.obs.ssid)
        if score <= 0.0:
            return None
        ctx.reasons.append(f"Suspicious network name: '{ctx.obs.ssid}'")
        ctx.reasons.append("Common honeypot/phishing SSID pattern")
        return ctx.verdict(AttackType.ROGUE_AP, score)

    def _open_strong_signal(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        obs = ctx.obs
        if not (is_open_network(obs.capabilities) and obs.signal_dbm > -60):
            return None
        ctx.reasons.append("Unencrypted (open) network")
        ctx.reasons.append(f"Strong signal: {obs.signal_dbm}dBm")
        ctx.reasons.append("Potential honeypot or public hotspot")
        return ctx.verdict(AttackType.ROGUE_AP, 0.55)

    def _unknown_strong_signal(self, ctx: _RuleContext) -> Optional[RuleVerdict]:
        obs = ctx.obs
        if not (obs.signal_dbm > -35 and ctx.record.category is DeviceCategory.UNKNOWN):
            return None
        ctx.reasons.append(
            f"Extremely strong signal from unknown device ({obs.signal_dbm}dBm)"
        )
        ctx.reasons.append(f"Device: {ctx.device}")
        return ctx.verdict(AttackType.ROGUE_AP, 0.50)
