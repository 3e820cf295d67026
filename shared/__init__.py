"""
NetTrust Shared Module
=======================

Configuration, logging, console and numeric helpers shared by the
NetTrust detector and its command-line interface.
"""

from shared.config import DetectionConfig, GlobalConfig, NetTrustConfig

__all__ = ["DetectionConfig", "GlobalConfig", "NetTrustConfig"]
