"""
NetTrust Vendor Directory
==========================

Static lookup from hardware address prefix (OUI) to manufacturer,
device category and trust. Distinguishes legitimate router brands,
mobile phones that can run personal hotspots, and hardware commonly
used to build attack access points.

The Organizationally Unique Identifier (OUI) is the first 24 bits
(3 octets) of a MAC address, assigned by IEEE to hardware vendors.
Addresses outside the table that have the universal/local bit set are
reported as locally administered.

References:
    - IEEE. (2014). IEEE Std 802-2014. Section 8.2: Universal/Local bit.
    - IEEE Registration Authority. MA-L (OUI) public listing.
"""

from __future__ import annotations

from shared.logger import TrustLogger

from nettrust.core.models import DeviceCategory, VendorRecord, normalize_bssid

logger = TrustLogger("analyzers.vendor")


_ROUTER = DeviceCategory.ROUTER
_PHONE = DeviceCategory.MOBILE_PHONE
_ATTACK = DeviceCategory.ATTACK_DEVICE

# Declared entries, in order. Building the table from this list means a
# prefix declared twice resolves to its last entry.
_OUI_ENTRIES: list[tuple[str, str, DeviceCategory, bool]] = [
    # Legitimate routers (trusted)
    ("f4:ec:38", "TP-Link", _ROUTER, True),
    ("50:c7:bf", "TP-Link", _ROUTER, True),
    ("c0:25:e9", "TP-Link", _ROUTER, True),
    ("14:cc:20", "TP-Link", _ROUTER, True),
    ("b0:4e:26", "TP-Link", _ROUTER, True),
    ("ac:84:c6", "TP-Link", _ROUTER, True),
    ("a0:40:a0", "Netgear", _ROUTER, True),
    ("e0:46:9a", "Netgear", _ROUTER, True),
    ("20:e5:2a", "Netgear", _ROUTER, True),
    ("c0:3f:0e", "Netgear", _ROUTER, True),
    ("9c:3d:cf", "Netgear", _ROUTER, True),
    ("14:d6:4d", "D-Link", _ROUTER, True),
    ("b8:a3:86", "D-Link", _ROUTER, True),
    ("c8:be:19", "D-Link", _ROUTER, True),
    ("cc:b2:55", "D-Link", _ROUTER, True),
    ("04:d4:c4", "ASUS", _ROUTER, True),
    ("10:c3:7b", "ASUS", _ROUTER, True),
    ("38:2c:4a", "ASUS", _ROUTER, True),
    ("f0:79:59", "ASUS", _ROUTER, True),
    ("2c:fd:a1", "ASUS", _ROUTER, True),
    ("00:14:bf", "Linksys", _ROUTER, True),
    ("c4:41:1e", "Linksys", _ROUTER, True),
    ("48:f8:b3", "Linksys", _ROUTER, True),
    ("e8:9f:80", "Linksys", _ROUTER, True),
    ("00:1f:ca", "Cisco", _ROUTER, True),
    ("d8:b3:77", "Cisco", _ROUTER, True),
    ("6c:41:6a", "Cisco", _ROUTER, True),
    ("00:e0:fc", "Huawei", _ROUTER, True),
    ("f8:e7:1e", "Huawei", _ROUTER, True),
    ("68:db:f5", "Huawei", _ROUTER, True),
    ("00:66:4b", "Huawei", _ROUTER, True),
    ("48:7d:2e", "Mercusys", _ROUTER, True),
    ("98:25:4a", "Mercusys", _ROUTER, True),
    ("c8:3a:35", "Tenda", _ROUTER, True),
    ("98:fc:11", "Tenda", _ROUTER, True),
    ("64:09:80", "Xiaomi Router", _ROUTER, True),
    ("34:ce:00", "Xiaomi Router", _ROUTER, True),
    ("78:11:dc", "Xiaomi Router", _ROUTER, True),
    # Mobile phones (hotspot sources)
    ("00:cd:fe", "Apple", _PHONE, False),
    ("3c:06:30", "Apple", _PHONE, False),
    ("a8:5b:78", "Apple", _PHONE, False),
    ("f0:db:e2", "Apple", _PHONE, False),
    ("bc:9f:ef", "Apple", _PHONE, False),
    ("40:98:ad", "Apple", _PHONE, False),
    ("d0:03:4b", "Apple", _PHONE, False),
    ("78:7b:8a", "Apple", _PHONE, False),
    ("08:d4:2b", "Samsung", _PHONE, False),
    ("c8:19:f7", "Samsung", _PHONE, False),
    ("50:32:75", "Samsung", _PHONE, False),
    ("38:aa:3c", "Samsung", _PHONE, False),
    ("18:4f:32", "Samsung", _PHONE, False),
    ("68:ef:bd", "Samsung", _PHONE, False),
    ("a0:82:1f", "Samsung", _PHONE, False),
    ("f4:f5:e8", "Google", _PHONE, False),
    ("ac:37:43", "Google", _PHONE, False),
    ("88:75:56", "Google", _PHONE, False),
    # TODO: ac:37:43 is declared for both Google and OnePlus; confirm the
    # intended attribution against the IEEE registry before dropping one.
    ("ac:37:43", "OnePlus", _PHONE, False),
    ("8c:88:c0", "OnePlus", _PHONE, False),
    ("34:80:b3", "Xiaomi Phone", _PHONE, False),
    ("50:8f:4c", "Xiaomi Phone", _PHONE, False),
    ("f8:c3:9e", "Xiaomi Phone", _PHONE, False),
    ("94:7b:e7", "Oppo", _PHONE, False),
    ("20:47:ed", "Oppo", _PHONE, False),
    ("30:84:2a", "Vivo", _PHONE, False),
    ("f0:72:8c", "Vivo", _PHONE, False),
    ("e0:9d:fa", "Realme", _PHONE, False),
    # Attack hardware (suspicious)
    ("de:ad:be", "Flipper Zero", _ATTACK, False),
    ("b8:27:eb", "Raspberry Pi", _ATTACK, False),
    ("dc:a6:32", "Raspberry Pi", _ATTACK, False),
    ("e4:5f:01", "Raspberry Pi", _ATTACK, False),
    ("24:0a:c4", "Espressif (ESP32)", _ATTACK, False),
    ("30:ae:a4", "Espressif (ESP32)", _ATTACK, False),
    ("a4:cf:12", "Espressif (ESP32)", _ATTACK, False),
    ("ec:fa:bc", "Espressif (ESP32)", _ATTACK, False),
    ("90:a2:da", "Arduino", _ATTACK, False),
]

UNKNOWN_VENDOR = VendorRecord(vendor="Unknown", category=DeviceCategory.UNKNOWN)
LOCAL_VENDOR = VendorRecord(vendor="Unknown (Local MAC)", category=DeviceCategory.UNKNOWN)


def is_locally_administered(address: str) -> bool:
    """Determine if a MAC address is locally administered.

    Per IEEE 802-2014, the second least significant bit of the first
    octet indicates whether the address is universally administered (0)
    or locally administered (1). Spoofed and randomised addresses carry
    the local bit.

    Args:
        address: MAC address in colon-separated hex format.

    Returns:
        True if the address is locally administered; False for
        universal or unparseable addresses.
    """
    try:
        first_octet = int(normalize_bssid(address).split(":")[0], 16)
    except (ValueError, IndexError):
        return False
    return bool(first_octet & 0x02)


class VendorDirectory:
    """Read-only OUI directory.

    Usage::

        vendors = VendorDirectory()
        record = vendors.lookup("F4:EC:38:12:34:56")
        record.vendor        # 'TP-Link'
        vendors.describe("f4:ec:38:12:34:56")
        # 'TP-Link Router (Legitimate)'
    """

    def __init__(
        self,
        entries: list[tuple[str, str, DeviceCategory, bool]] | None = None,
    ) -> None:
        table: dict[str, VendorRecord] = {}
        for prefix, vendor, category, trusted in entries or _OUI_ENTRIES:
            table[normalize_bssid(prefix)] = VendorRecord(
                vendor=vendor, category=category, trusted=trusted
            )
        self._table = table

    def __len__(self) -> int:
        return len(self._table)

    def lookup(self, address: str) -> VendorRecord:
        """Look up the vendor record for *address*.

        Returns:
            The table entry for the 3-octet prefix; otherwise a local or
            generic Unknown record.
        """
        record = self._table.get(normalize_bssid(address)[:8])
        if record is not None:
            return record
        if is_locally_administered(address):
            logger.debug("Locally administered address: %s", address)
            return LOCAL_VENDOR
        return UNKNOWN_VENDOR

    def is_legitimate_router(self, address: str) -> bool:
        record = self.lookup(address)
        return record.category is DeviceCategory.ROUTER and record.trusted

    def is_mobile_device(self, address: str) -> bool:
        return self.lookup(address).category is DeviceCategory.MOBILE_PHONE

    def is_known_attack_device(self, address: str) -> bool:
        return self.lookup(address).category is DeviceCategory.ATTACK_DEVICE

    def describe(self, address: str) -> str:
        """Human-readable device description used in detection reasons."""
        record = self.lookup(address)
        category = record.category
        if category is DeviceCategory.ROUTER:
            return f"{record.vendor} Router (Legitimate)"
        if category is DeviceCategory.MOBILE_PHONE:
            return f"{record.vendor} Mobile Device"
        if category is DeviceCategory.ATTACK_DEVICE:
            return f"{record.vendor} (SUSPICIOUS HARDWARE)"
        if category is DeviceCategory.COMPUTER:
            return f"{record.vendor} Computer"
        if category is DeviceCategory.IOT_DEVICE:
            return f"{record.vendor} IoT Device"
        return record.vendor if record.vendor != "Unknown" else "Unknown Manufacturer"
