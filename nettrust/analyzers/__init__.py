"""
NetTrust Analyzers
===================

Classification stages of the detection pipeline:

    vendor    -- OUI vendor directory
    features  -- Feature vector extraction
    scaler    -- Z-score standardisation
    scorer    -- Statistical class scorer
    rules     -- Ordered heuristic rule engine
    fusion    -- Rule/scorer fusion and thresholding
    threat    -- Threat level and advisory text
"""

from nettrust.analyzers.features import FeatureExtractor
from nettrust.analyzers.fusion import DecisionFusion
from nettrust.analyzers.rules import RuleEngine
from nettrust.analyzers.scaler import Standardizer
from nettrust.analyzers.scorer import StatisticalScorer
from nettrust.analyzers.threat import classify_threat, recommended_action
from nettrust.analyzers.vendor import VendorDirectory

__all__ = [
    "DecisionFusion",
    "FeatureExtractor",
    "RuleEngine",
    "StatisticalScorer",
    "Standardizer",
    "VendorDirectory",
    "classify_threat",
    "recommended_action",
]
