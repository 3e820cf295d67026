"""
NetTrust Configuration Management
==================================

Dataclass settings for the NetTrust detector, persisted as TOML.

Architecture follows the Twelve-Factor App methodology for configuration
management (Wiggins, 2011): the detection constants (acceptance
thresholds, persistence counts, boost factors) are data, not code, and
the file location can be supplied through the environment.

Lookup order for the configuration file:

    1. an explicit path (``nettrust --config FILE``)
    2. the ``NETTRUST_CONFIG`` environment variable
    3. ``config.toml`` in the project root

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import os
import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, TypeVar

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]

CONFIG_ENV_VAR = "NETTRUST_CONFIG"
_PROJECT_CONFIG: Path = Path(__file__).resolve().parent.parent / "config.toml"

_Section = TypeVar("_Section")


# ========================== Detection Settings =============================


@dataclass(slots=True)
class DetectionConfig:
    """Settings for the detection engine.

    Covers where model parameters are read from, the per-class acceptance
    thresholds used by decision fusion, and the constants of the evidence
    state machine.

    Raises:
        ValueError: On construction with a probability outside [0, 1], a
            boost below 1 or a non-positive count.
    """

    # Model parameter files
    model_dir: str = "assets/model"
    scaler_file: str = "scaler_params.json"
    features_file: str = "feature_names.json"
    metadata_file: str = "model_metadata.json"

    # Profile tracking
    history_size: int = 5
    baseline_threshold: int = 3
    persistence_threshold: int = 2

    # Acceptance thresholds per attack class
    evil_twin_threshold: float = 0.65
    rogue_ap_threshold: float = 0.60
    default_threshold: float = 0.50

    # Evidence boosts
    confirm_boost: float = 1.2
    sustain_boost: float = 1.15
    confidence_ceiling: float = 0.95
    baseline_override: float = 0.70

    def __post_init__(self) -> None:
        for name in (
            "evil_twin_threshold", "rogue_ap_threshold", "default_threshold",
            "confidence_ceiling", "baseline_override",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"detection.{name} must be within [0, 1], got {value}")
        for name in ("confirm_boost", "sustain_boost"):
            if getattr(self, name) < 1.0:
                raise ValueError(f"detection.{name} must be >= 1.0")
        for name in ("history_size", "baseline_threshold", "persistence_threshold"):
            if getattr(self, name) < 1:
                raise ValueError(f"detection.{name} must be a positive count")


# =========================== Global Settings ===============================


@dataclass(slots=True)
class GlobalConfig:
    """Logging, output and worker settings shared by every command."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    output_dir: str = "output"
    max_workers: int = 1
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


def _section(kind: type[_Section], table: Any) -> _Section:
    """Build a settings dataclass from a TOML table, ignoring unknown keys."""
    if not isinstance(table, dict):
        return kind()
    known = {f.name for f in fields(kind)}  # type: ignore[arg-type]
    return kind(**{k: v for k, v in table.items() if k in known})


@dataclass(slots=True)
class NetTrustConfig:
    """Top-level configuration: ``[global]`` and ``[detection]`` tables.

    Usage:
        >>> config = NetTrustConfig.load()
        >>> config.detection.evil_twin_threshold
        0.65
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> NetTrustConfig:
        """Read settings from TOML; absent keys keep their defaults.

        Args:
            path: Configuration file. When omitted, ``$NETTRUST_CONFIG``
                  or the project ``config.toml`` is used if present.

        Raises:
            FileNotFoundError: If an explicitly named file does not exist.
            tomllib.TOMLDecodeError: If the file is not valid TOML.
            ValueError: If a detection setting is out of range.
        """
        explicit = path if path is not None else os.environ.get(CONFIG_ENV_VAR)
        source = Path(explicit) if explicit else _PROJECT_CONFIG

        if not source.is_file():
            if explicit:
                raise FileNotFoundError(f"Configuration file not found: {source}")
            return cls()

        with open(source, "rb") as fh:
            raw = tomllib.load(fh)

        return cls(
            global_settings=_section(GlobalConfig, raw.get("global")),
            detection=_section(DetectionConfig, raw.get("detection")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
