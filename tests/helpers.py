"""
Observation builders and well-known addresses used across the tests.
"""

from nettrust.core.models import Observation

FEATURE_NAMES = [
    "frame.len",
    "radiotap.dbm_antsignal",
    "wlan_radio.channel",
    "wlan_radio.data_rate",
    "wlan.rsn.version",
    "tcp.flags.syn",
]

ROUTER = "f4:ec:38:12:34:56"      # TP-Link, trusted router
ROUTER_2 = "f4:ec:38:12:34:99"
IPHONE = "3c:06:30:aa:bb:01"      # Apple, mobile phone
FLIPPER = "de:ad:be:ef:00:01"     # attack hardware prefix
UNKNOWN = "00:11:22:33:44:55"     # universal, not in the directory
UNKNOWN_2 = "00:11:22:33:44:66"
LOCAL = "02:11:22:33:44:55"       # locally administered

WPA2 = "[WPA2-PSK-CCMP][ESS]"
OPEN = "[ESS]"


def obs(bssid, ssid="HomeNet", signal=-70, frequency=2437, capabilities=WPA2, **kwargs):
    """Build an observation with sensible defaults."""
    return Observation(
        ssid=ssid,
        bssid=bssid,
        frequency=frequency,
        signal_dbm=signal,
        capabilities=capabilities,
        **kwargs,
    )
