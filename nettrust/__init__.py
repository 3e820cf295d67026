"""
NetTrust -- Evil Twin & Rogue Access Point Detector
=====================================================

NetTrust classifies wireless access-point observations as trustworthy or
malicious. An Evil Twin impersonates the name of a trusted network; a
Rogue AP is an unauthorized access point such as a personal hotspot or a
honeypot. Decisions combine device fingerprinting, ordered heuristics, a
lightweight statistical scorer and evidence accumulated across repeated
scans of the same device.

Modules:
    core.engine     -- Detection engine orchestration
    core.tracker    -- Per-device profiles and evidence state machine
    core.models     -- Pydantic domain models
    analyzers       -- Vendor directory, features, scorer, rules, fusion
    collectors      -- Model parameter and scan file readers
    output          -- Console and JSON report output
    cli             -- Click-based command-line interface

References:
    - IEEE. (2020). IEEE Std 802.11-2020: Wireless LAN MAC and PHY
      Specifications.
    - Roth, V., Polak, W., Rieffel, E., & Thea, T. (2008). Simple and
      Effective Defense Against Evil Twin Access Points. WiSec '08.
"""

__version__ = "1.0.0"
__tool__ = "NetTrust"
__description__ = "Evil Twin & Rogue Access Point Detector"
