"""
NetTrust Model Loader
======================

Reads the fitted statistical model parameters from a directory:

    scaler_params.json    {"mean": [...], "scale": [...], "var": [...]}
    feature_names.json    ["frame.len", "radiotap.dbm_antsignal", ...]
    model_metadata.json   {"model_version": "...",
                           "performance": {"test_accuracy": 0.93}}

The metadata file is optional. File names come from
:class:`~shared.config.DetectionConfig`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from shared.config import DetectionConfig
from shared.logger import TrustLogger

logger = TrustLogger("collectors.model_loader")


class ModelConfigError(Exception):
    """Model parameter files are missing, malformed or inconsistent."""


class ModelBundle(BaseModel):
    """Immutable set of parameters the detection engine runs on.

    Attributes:
        mean: Per-feature standardisation mean.
        scale: Per-feature standardisation scale.
        feature_names: Ordered feature names.
        accuracy: Test accuracy as a fraction [0, 1].
        model_version: Free-form version label.
    """

    model_config = ConfigDict(frozen=True)

    mean: tuple[float, ...]
    scale: tuple[float, ...]
    feature_names: tuple[str, ...]
    accuracy: float = Field(default=0.0, ge=0.0, le=1.0)
    model_version: str = "unknown"

    @model_validator(mode="after")
    def _lengths_match(self) -> ModelBundle:
        if not (len(self.mean) == len(self.scale) == len(self.feature_names)):
            raise ValueError(
                f"Scaler/feature length mismatch: mean={len(self.mean)}, "
                f"scale={len(self.scale)}, features={len(self.feature_names)}"
            )
        return self

    @property
    def feature_count(self) -> int:
        return len(self.feature_names)


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise ModelConfigError(f"Model file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ModelConfigError(f"Malformed JSON in {path}: {exc}") from exc


def _metadata_accuracy(metadata: dict[str, Any]) -> float:
    """``performance.test_accuracy`` as a fraction; unusable values read as 0.0.

    Metadata is informational, so a bad accuracy never rejects the model.
    """
    performance = metadata.get("performance")
    if not isinstance(performance, dict):
        return 0.0
    if "test_accuracy" not in performance:
        return 0.0
    value = performance["test_accuracy"]
    numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
    if not numeric or not 0.0 <= value <= 1.0:
        logger.warning("Ignoring unusable test_accuracy in model metadata: %r", value)
        return 0.0
    return float(value)


def load_model_bundle(
    directory: str | Path,
    config: Optional[DetectionConfig] = None,
) -> ModelBundle:
    """Load and validate the model parameters stored in *directory*.

    Raises:
        ModelConfigError: On a missing required file, malformed JSON, a
            schema violation or a length mismatch.
    """
    cfg = config or DetectionConfig()
    root = Path(directory)
    if not root.is_dir():
        raise ModelConfigError(f"Model directory not found: {root}")

    scaler = _read_json(root / cfg.scaler_file)
    features = _read_json(root / cfg.features_file)

    metadata: dict[str, Any] = {}
    metadata_path = root / cfg.metadata_file
    if metadata_path.exists():
        metadata = _read_json(metadata_path)
    else:
        logger.debug("No model metadata at %s", metadata_path)

    if not isinstance(scaler, dict):
        raise ModelConfigError(f"{cfg.scaler_file} must hold a JSON object")
    if not isinstance(metadata, dict):
        logger.warning("Ignoring %s: expected a JSON object", cfg.metadata_file)
        metadata = {}

    try:
        bundle = ModelBundle(
            mean=scaler.get("mean"),
            scale=scaler.get("scale"),
            feature_names=features,
            accuracy=_metadata_accuracy(metadata),
            model_version=str(metadata.get("model_version") or "unknown"),
        )
    except ValidationError as exc:
        raise ModelConfigError(f"Invalid model parameters in {root}: {exc}") from exc

    logger.info(
        "Model loaded: %d features, accuracy %.2f%%",
        bundle.feature_count, bundle.accuracy * 100,
    )
    return bundle
