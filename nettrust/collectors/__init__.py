"""
NetTrust Collectors
====================

Readers for the detector's inputs: fitted model parameters and recorded
wireless scans.
"""

from nettrust.collectors.model_loader import ModelBundle, ModelConfigError, load_model_bundle
from nettrust.collectors.scan_reader import ScanFormatError, read_scan, read_scan_rounds

__all__ = [
    "ModelBundle",
    "ModelConfigError",
    "ScanFormatError",
    "load_model_bundle",
    "read_scan",
    "read_scan_rounds",
]
