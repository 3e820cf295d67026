"""
NetTrust Feature Extractor
===========================

Maps a scan observation onto the fixed-order numeric feature vector the
statistical model was fitted on.

The model's feature names come from packet-capture fields (Wireshark
display-filter names such as ``wlan_radio.signal_dbm``). A platform scan
only reports signal strength, frequency, channel and capabilities, so
every other field receives the constant it takes for a beacon frame, and
fields from protocol layers above 802.11 are zero.

The output preserves the configured name order because the
:class:`~nettrust.analyzers.scaler.Standardizer` aligns by index.

References:
    - Wireshark Display Filter Reference: wlan, wlan_radio, radiotap.
    - IEEE. (2020). IEEE Std 802.11-2020. Section 9.3.3.2: Beacon frame.
"""

from __future__ import annotations

from typing import Callable, Sequence

from nettrust.core.models import Observation

_HIGH_BAND_MHZ = 5000
_HIGH_RATE_MBPS = 54.0
_LOW_RATE_MBPS = 24.0

_Derivation = Callable[[Observation], float]


def _rate(obs: Observation) -> float:
    return _HIGH_RATE_MBPS if obs.frequency >= _HIGH_BAND_MHZ else _LOW_RATE_MBPS


def _signal(obs: Observation) -> float:
    return float(obs.signal_dbm)


def _low_band(obs: Observation) -> float:
    return 1.0 if obs.frequency < _HIGH_BAND_MHZ else 0.0


def _wpa(obs: Observation) -> float:
    return 1.0 if "WPA" in obs.capabilities.upper() else 0.0


def _const(value: float) -> _Derivation:
    return lambda obs: value


# First matching substring wins; order matters where one key contains
# another.
_DERIVATIONS: tuple[tuple[str, _Derivation], ...] = (
    # Frame
    ("frame.len", _const(100.0)),
    ("frame.time", _const(0.0)),
    # Radiotap
    ("radiotap.channel.flags.cck", _low_band),
    ("radiotap.datarate", _rate),
    ("radiotap.dbm_antsignal", _signal),
    ("radiotap.length", _const(24.0)),
    # 802.11 MAC header (beacon)
    ("wlan.duration", _const(44.0)),
    ("wlan.fc.type", _const(0.0)),
    ("wlan.fc.retry", _const(0.0)),
    ("wlan.fc.subtype", _const(8.0)),
    ("wlan.fixed.reason_code", _const(0.0)),
    # Radio information
    ("wlan_radio.channel", lambda obs: float(obs.channel)),
    ("wlan_radio.data_rate", _rate),
    ("wlan_radio.signal_dbm", _signal),
    ("wlan_radio.duration", _const(44.0)),
    ("wlan_radio.phy", lambda obs: 5.0 if obs.frequency >= _HIGH_BAND_MHZ else 4.0),
    # Security
    ("wlan.rsn", _wpa),
    ("wlan_rsna", _wpa),
    # Network, transport and application layers are not visible to a
    # wireless scan.
    *((layer, _const(0.0)) for layer in (
        "arp", "ip.", "tcp.", "udp.", "data.len",
        "smb", "dhcp", "dns", "http", "ssh",
    )),
)


def derive_feature(name: str, obs: Observation) -> float:
    """Value of a single named feature for *obs*; unknown names yield 0."""
    for key, derive in _DERIVATIONS:
        if key in name:
            return derive(obs)
    return 0.0


class FeatureExtractor:
    """Builds model feature vectors from observations.

    Usage::

        extractor = FeatureExtractor(["wlan_radio.signal_dbm", "tcp.port"])
        extractor.extract(observation)   # [-52.0, 0.0]
    """

    def __init__(self, feature_names: Sequence[str]) -> None:
        self._feature_names = tuple(feature_names)

    @property
    def feature_names(self) -> tuple[str, ...]:
        return self._feature_names

    def __len__(self) -> int:
        return len(self._feature_names)

    def extract(self, obs: Observation) -> list[float]:
        return [derive_feature(name, obs) for name in self._feature_names]
