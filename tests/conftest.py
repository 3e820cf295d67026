"""
Shared fixtures for the NetTrust test suite.
"""

import json
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from nettrust.analyzers.rules import RuleEngine
from nettrust.analyzers.vendor import VendorDirectory
from nettrust.core.engine import DetectionEngine
from nettrust.core.tracker import EvidenceTracker

from tests.helpers import FEATURE_NAMES


@pytest.fixture
def engine():
    """Loaded engine with identity standardisation."""
    n = len(FEATURE_NAMES)
    return DetectionEngine.from_parameters(
        mean=[0.0] * n,
        scale=[1.0] * n,
        feature_names=FEATURE_NAMES,
        accuracy=0.8867,
    )


@pytest.fixture
def tracker():
    return EvidenceTracker()


@pytest.fixture
def rules():
    return RuleEngine(VendorDirectory())


@pytest.fixture
def model_dir(tmp_path):
    """Directory holding a valid set of model parameter files."""
    directory = tmp_path / "model"
    directory.mkdir()
    n = len(FEATURE_NAMES)
    (directory / "scaler_params.json").write_text(
        json.dumps({"mean": [0.5] * n, "scale": [2.0] * n})
    )
    (directory / "feature_names.json").write_text(json.dumps(FEATURE_NAMES))
    (directory / "model_metadata.json").write_text(
        json.dumps({"model_version": "6.0", "performance": {"test_accuracy": 0.8867}})
    )
    return directory
