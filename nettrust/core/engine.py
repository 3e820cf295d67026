"""
NetTrust Detection Engine
==========================

Central orchestration engine for the NetTrust access-point classifier.
Each observation runs through a fixed pipeline:

    1. Tracking: update the device profile and SSID index
    2. Features: extract and standardise the model feature vector
    3. Scoring: statistical class distribution
    4. Rules: ordered first-match heuristics
    5. Fusion: combine rule and scorer, gate on class threshold
    6. Evidence: persistent-attack state machine and baseline dampening
    7. Threat: ordinal threat level and advisory text

The engine never raises from :meth:`DetectionEngine.detect`: a missing
model yields a fixed Safe result and any failure inside one detection is
logged and turned into a Safe result carrying the error.

References:
    - Roth, V., Polak, W., Rieffel, E., & Thea, T. (2008). Simple and
      Effective Defense Against Evil Twin Access Points. WiSec '08.
    - Evans, E. (2003). Domain-Driven Design. Addison-Wesley.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from pydantic import ValidationError

from shared.config import DetectionConfig
from shared.logger import TrustLogger

from nettrust.analyzers.features import FeatureExtractor
from nettrust.analyzers.fusion import DecisionFusion
from nettrust.analyzers.rules import RuleEngine
from nettrust.analyzers.scaler import Standardizer
from nettrust.analyzers.scorer import StatisticalScorer
from nettrust.analyzers.threat import classify_threat, recommended_action
from nettrust.analyzers.vendor import VendorDirectory
from nettrust.collectors.model_loader import (
    ModelBundle,
    ModelConfigError,
    load_model_bundle,
)
from nettrust.core.models import (
    HIDDEN_NETWORK_NAME,
    AttackType,
    DetectionResult,
    Observation,
    ScanSummary,
    ThreatLevel,
)
from nettrust.core.tracker import EvidenceTracker

logger = TrustLogger("core.engine")


def _echo(obs: Any, name: str, default: Any) -> Any:
    """Attribute of *obs* when present with the default's type, else *default*."""
    value = getattr(obs, name, default)
    if isinstance(value, type(default)) and not isinstance(value, bool):
        return value
    return default


class DetectionEngine:
    """Classifies access-point observations as Safe, Evil Twin or Rogue AP.

    Usage::

        engine = DetectionEngine.from_directory("assets/model")
        result = engine.detect(observation)
        results = engine.detect_batch(observations, max_workers=4)
        engine.get_learned_networks()

    Args:
        bundle: Model parameters. ``None`` yields a not-loaded engine.
        config: Detection settings. Uses defaults if None.
        vendors: Vendor directory. Uses the built-in table if None.
    """

    def __init__(
        self,
        bundle: Optional[ModelBundle] = None,
        *,
        config: Optional[DetectionConfig] = None,
        vendors: Optional[VendorDirectory] = None,
    ) -> None:
        self._config = config or DetectionConfig()
        self._bundle = bundle
        self._vendors = vendors or VendorDirectory()

        # Analyzers
        self._rules = RuleEngine(self._vendors)
        self._scorer = StatisticalScorer()
        self._fusion = DecisionFusion(self._config)
        self._tracker = EvidenceTracker(self._config)

        self._extractor: Optional[FeatureExtractor] = None
        self._standardizer: Optional[Standardizer] = None
        if bundle is not None:
            self._extractor = FeatureExtractor(bundle.feature_names)
            self._standardizer = Standardizer(bundle.mean, bundle.scale)

    # ------------------------------------------------------------------ #
    #  Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def from_directory(
        cls,
        path: str | Path | None = None,
        config: Optional[DetectionConfig] = None,
    ) -> DetectionEngine:
        """Build an engine from a model directory.

        A directory that cannot be loaded is logged and produces a
        not-loaded engine rather than an exception.
        """
        cfg = config or DetectionConfig()
        directory = Path(path) if path is not None else Path(cfg.model_dir)
        with logger.operation("load_model"):
            try:
                bundle = load_model_bundle(directory, cfg)
            except ModelConfigError as exc:
                logger.error("Error loading model from %s: %s", directory, exc)
                bundle = None
            else:
                logger.debug("Model %s from %s", bundle.model_version, directory, path=str(directory))
        return cls(bundle, config=cfg)

    @classmethod
    def from_parameters(
        cls,
        mean: Sequence[float],
        scale: Sequence[float],
        feature_names: Sequence[str],
        accuracy: float = 0.0,
        config: Optional[DetectionConfig] = None,
    ) -> DetectionEngine:
        """Build an engine from in-memory parameters.

        Inconsistent parameters are logged and produce a not-loaded
        engine, as with :meth:`from_directory`.
        """
        try:
            bundle = ModelBundle(
                mean=tuple(mean),
                scale=tuple(scale),
                feature_names=tuple(feature_names),
                accuracy=accuracy,
            )
        except ValidationError as exc:
            logger.error("Invalid model parameters: %s", exc)
            bundle = None
        return cls(bundle, config=config)

    # ------------------------------------------------------------------ #
    #  Detection
    # ------------------------------------------------------------------ #

    def detect(self, obs: Observation) -> DetectionResult:
        """Classify one observation and update tracking state."""
        if not self.is_loaded():
            return self._fallback_result(obs, "Detection model not loaded", "Model not loaded")

        try:
            with self._tracker.lock_for(obs.bssid):
                return self._detect_locked(obs)
        except Exception as exc:
            logger.exception(
                "Detection error for %s (%s)",
                getattr(obs, "ssid", ""), getattr(obs, "bssid", ""),
            )
            return self._fallback_result(
                obs, f"Detection error: {exc}", "Network appears safe. Monitoring..."
            )

    def detect_batch(
        self,
        observations: Iterable[Observation],
        max_workers: int = 1,
    ) -> list[DetectionResult]:
        """Classify many observations; results are in input order.

        With ``max_workers > 1`` observations are grouped by address and
        the groups run in a thread pool. Order within one address is
        preserved; order across addresses is not.
        """
        items = list(observations)
        if max_workers <= 1 or len(items) < 2:
            return [self.detect(obs) for obs in items]

        groups: dict[str, list[int]] = {}
        for index, obs in enumerate(items):
            groups.setdefault(getattr(obs, "bssid", ""), []).append(index)

        results: list[Optional[DetectionResult]] = [None] * len(items)

        def run_group(indices: list[int]) -> None:
            for index in indices:
                results[index] = self.detect(items[index])

        with logger.timed(f"Batch of {len(items)} ({len(groups)} addresses)"):
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                futures = [pool.submit(run_group, indices) for indices in groups.values()]
                for future in futures:
                    future.result()

        return [r for r in results if r is not None]

    def _detect_locked(self, obs: Observation) -> DetectionResult:
        cfg = self._config

        profile = self._tracker.record(obs)

        vector = self._extractor.extract(obs)
        standardized = self._standardizer.standardize(vector)
        distribution = self._scorer.score(standardized, obs.signal_dbm, obs.frequency)

        rule = self._rules.evaluate(obs, self._tracker)
        fused = self._fusion.fuse(rule, distribution, profile.is_baseline)
        final = self._tracker.apply_verdict(
            profile,
            fused,
            self._fusion.threshold_for(fused.attack_type),
            obs.timestamp,
        )

        level = classify_threat(
            final.confidence, final.attack_type, profile.is_baseline, cfg.baseline_override
        )
        detection_count = profile.evidence.detection_count if profile.evidence else 0

        logger.debug(
            "%s | %s (%.0f%%) | count=%d | baseline=%s",
            obs.ssid or HIDDEN_NETWORK_NAME, final.attack_type.value,
            final.confidence * 100, detection_count, profile.is_baseline,
        )

        return DetectionResult(
            network_name=obs.ssid or HIDDEN_NETWORK_NAME,
            bssid=obs.bssid,
            attack_type=final.attack_type,
            confidence=final.confidence,
            is_rogue_ap=final.attack_type.is_attack,
            is_threat=level is not ThreatLevel.SAFE,
            threat_level=level,
            probabilities={a.value: p for a, p in distribution.items()},
            signal_strength=obs.signal_dbm,
            frequency=obs.frequency,
            channel=obs.channel,
            timestamp=obs.timestamp,
            recommended_action=recommended_action(
                final.attack_type, level, profile.is_baseline
            ),
            is_baseline=profile.is_baseline,
            detection_count=detection_count,
            reasons=final.reasons,
            vendor=self._vendors.describe(obs.bssid),
        )

    def _fallback_result(
        self, obs: Observation, reason: str, action: str
    ) -> DetectionResult:
        # obs may not be a valid Observation here
        ssid = _echo(obs, "ssid", "")
        timestamp = getattr(obs, "timestamp", None)
        return DetectionResult(
            network_name=ssid or HIDDEN_NETWORK_NAME,
            bssid=_echo(obs, "bssid", ""),
            attack_type=AttackType.SAFE,
            confidence=0.0,
            threat_level=ThreatLevel.SAFE,
            signal_strength=_echo(obs, "signal_dbm", 0),
            frequency=_echo(obs, "frequency", 0),
            channel=_echo(obs, "channel", 0),
            timestamp=timestamp if isinstance(timestamp, datetime) else datetime.now(timezone.utc),
            recommended_action=action,
            reasons=[reason],
        )

    # ------------------------------------------------------------------ #
    #  Administration
    # ------------------------------------------------------------------ #

    def is_loaded(self) -> bool:
        return self._bundle is not None

    @property
    def bundle(self) -> Optional[ModelBundle]:
        return self._bundle

    @property
    def tracker(self) -> EvidenceTracker:
        return self._tracker

    def get_model_info(self) -> dict[str, Any]:
        """Model and tracking status."""
        bundle = self._bundle
        cfg = self._config
        return {
            "loaded": bundle is not None,
            "model_version": bundle.model_version if bundle else None,
            "feature_count": bundle.feature_count if bundle else 0,
            "accuracy": round(bundle.accuracy * 100, 2) if bundle else 0.0,
            "tracked": len(self._tracker),
            "learned": len(self._tracker.baseline_profiles()),
            "vendors": len(self._vendors),
            "thresholds": {
                AttackType.EVIL_TWIN.value: cfg.evil_twin_threshold,
                AttackType.ROGUE_AP.value: cfg.rogue_ap_threshold,
            },
        }

    def get_learned_networks(self) -> list[tuple[str, str]]:
        """``(ssid, bssid)`` of every learned baseline network."""
        return [(p.ssid, p.bssid) for p in self._tracker.baseline_profiles()]

    def clear_tracking(self) -> None:
        self._tracker.clear()

    @staticmethod
    def summarize(results: list[DetectionResult]) -> ScanSummary:
        return ScanSummary.from_results(results)
