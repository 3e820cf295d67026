"""
Unit tests for the OUI vendor directory.
"""

from nettrust.analyzers.vendor import (
    LOCAL_VENDOR,
    UNKNOWN_VENDOR,
    VendorDirectory,
    is_locally_administered,
)
from nettrust.core.models import DeviceCategory, VendorRecord


class TestLookup:
    """Tests for VendorDirectory.lookup."""

    def test_known_router(self):
        """A TP-Link prefix resolves to a trusted router."""
        record = VendorDirectory().lookup("f4:ec:38:12:34:56")
        assert record.vendor == "TP-Link"
        assert record.category is DeviceCategory.ROUTER
        assert record.trusted is True

    def test_case_and_separator_insensitive(self):
        """Upper-case and dash-separated addresses match the same entry."""
        vendors = VendorDirectory()
        assert vendors.lookup("F4-EC-38-12-34-56") == vendors.lookup("f4:ec:38:12:34:56")

    def test_duplicate_prefix_last_entry_wins(self):
        """ac:37:43 is declared for Google and OnePlus; OnePlus is declared last."""
        assert VendorDirectory().lookup("ac:37:43:00:00:01").vendor == "OnePlus"

    def test_unknown_universal_address(self):
        """An unlisted universal address is Unknown."""
        assert VendorDirectory().lookup("00:11:22:33:44:55") == UNKNOWN_VENDOR

    def test_unknown_local_address(self):
        """An unlisted address with the local bit set is flagged as local."""
        record = VendorDirectory().lookup("02:11:22:33:44:55")
        assert record == LOCAL_VENDOR
        assert record.vendor == "Unknown (Local MAC)"
        assert record.category is DeviceCategory.UNKNOWN

    def test_unparseable_address(self):
        """Garbage input yields the generic Unknown record."""
        assert VendorDirectory().lookup("not-a-mac") == UNKNOWN_VENDOR
        assert VendorDirectory().lookup("") == UNKNOWN_VENDOR

    def test_custom_entries(self):
        """A directory can be built from an explicit entry list."""
        vendors = VendorDirectory([("11:22:33", "Acme", DeviceCategory.IOT_DEVICE, False)])
        assert len(vendors) == 1
        assert vendors.lookup("11:22:33:44:55:66") == VendorRecord(
            vendor="Acme", category=DeviceCategory.IOT_DEVICE
        )
        assert vendors.describe("11:22:33:44:55:66") == "Acme IoT Device"


class TestPredicates:
    """Tests for the category predicates and descriptions."""

    def test_legitimate_router(self):
        vendors = VendorDirectory()
        assert vendors.is_legitimate_router("a0:40:a0:00:00:01")
        assert not vendors.is_legitimate_router("3c:06:30:00:00:01")

    def test_mobile_device(self):
        vendors = VendorDirectory()
        assert vendors.is_mobile_device("3c:06:30:00:00:01")
        assert not vendors.is_mobile_device("f4:ec:38:00:00:01")

    def test_attack_device(self):
        vendors = VendorDirectory()
        assert vendors.is_known_attack_device("b8:27:eb:00:00:01")
        assert vendors.is_known_attack_device("de:ad:be:ef:00:01")
        assert not vendors.is_known_attack_device("00:11:22:33:44:55")

    def test_describe(self):
        vendors = VendorDirectory()
        assert vendors.describe("f4:ec:38:00:00:01") == "TP-Link Router (Legitimate)"
        assert vendors.describe("3c:06:30:00:00:01") == "Apple Mobile Device"
        assert vendors.describe("b8:27:eb:00:00:01") == "Raspberry Pi (SUSPICIOUS HARDWARE)"
        assert vendors.describe("00:11:22:33:44:55") == "Unknown Manufacturer"
        assert vendors.describe("02:11:22:33:44:55") == "Unknown (Local MAC)"


class TestLocallyAdministered:
    """Tests for the universal/local bit check."""

    def test_local_bit(self):
        assert is_locally_administered("02:00:00:00:00:01")
        assert is_locally_administered("DA:A1:19:00:00:01")

    def test_universal(self):
        assert not is_locally_administered("00:11:22:33:44:55")
        assert not is_locally_administered("f4:ec:38:00:00:01")

    def test_unparseable(self):
        assert not is_locally_administered("zz:11:22:33:44:55")
