"""
Unit tests for the ordered rule engine.
"""

import pytest

from nettrust.analyzers.rules import (
    is_attack_tool_address,
    is_default_hotspot_name,
    is_open_network,
    suspicious_ssid_score,
)
from nettrust.core.models import AttackType

from tests.helpers import (
    FLIPPER,
    IPHONE,
    LOCAL,
    OPEN,
    ROUTER,
    ROUTER_2,
    UNKNOWN,
    UNKNOWN_2,
    obs,
)


def evaluate(rules, tracker, observation):
    """Record the observation, then evaluate it, as the engine does."""
    tracker.record(observation)
    return rules.evaluate(observation, tracker)


def make_baseline(tracker, observation):
    profile = tracker.record(observation)
    profile.is_baseline = True
    return profile


class TestHelpers:
    """Tests for the rule predicates."""

    @pytest.mark.parametrize("address", [
        "de:ad:00:00:00:01", "BE:EF:00:00:00:01", "ca:fe:11:22:33:44",
        "ba:be:00:00:00:01", "12:34:56:00:00:01", "aa:bb:cc:00:00:01",
    ])
    def test_attack_tool_prefixes(self, address):
        assert is_attack_tool_address(address)

    def test_not_attack_tool_prefix(self):
        assert not is_attack_tool_address("12:34:57:00:00:01")

    def test_default_hotspot_names(self):
        assert is_default_hotspot_name("John's iPhone")
        assert is_default_hotspot_name("SAMSUNG Galaxy")
        assert is_default_hotspot_name("Maria's Phone")
        assert not is_default_hotspot_name("HomeNet")

    def test_suspicious_ssid(self):
        assert suspicious_ssid_score("FreeWiFi") == 0.60
        assert suspicious_ssid_score("guest") == 0.60
        assert suspicious_ssid_score("Airport Lounge") == 0.60
        assert suspicious_ssid_score("open_office") == 0.0
        assert suspicious_ssid_score("hotel-5G") == 0.0
        assert suspicious_ssid_score("HomeNet") == 0.0
        assert suspicious_ssid_score("") == 0.0

    def test_open_network(self):
        assert is_open_network("[ESS]")
        assert is_open_network("")
        assert not is_open_network("[WPA2-PSK-CCMP][ESS]")
        assert not is_open_network("[WEP][ESS]")


class TestRuleOrder:
    """One test per rule, in evaluation order."""

    def test_attack_hardware(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(FLIPPER, ssid="CoffeeShop", signal=-45))
        assert verdict.attack_type is AttackType.EVIL_TWIN
        assert verdict.confidence == 0.95
        assert verdict.reasons[0].startswith("ATTACK HARDWARE DETECTED")

    def test_attack_tool_prefix_without_listed_vendor(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs("aa:bb:cc:01:02:03", ssid="Lab"))
        assert verdict.attack_type is AttackType.EVIL_TWIN

    def test_trusted_router_is_safe(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(ROUTER, signal=-30, capabilities=OPEN))
        assert verdict.attack_type is AttackType.SAFE
        assert verdict.confidence == 0.0
        assert verdict.reasons == []

    def test_trusted_router_with_learned_peer_is_mesh(self, rules, tracker):
        make_baseline(tracker, obs(ROUTER))
        verdict = evaluate(rules, tracker, obs(ROUTER_2))
        assert verdict.attack_type is AttackType.SAFE
        assert verdict.confidence == 0.30
        assert "May be legitimate mesh network or range extender" in verdict.reasons

    def test_mobile_hotspot(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(IPHONE, ssid="John's iPhone", signal=-52))
        assert verdict.attack_type is AttackType.ROGUE_AP
        assert verdict.confidence == 0.65
        assert "Default hotspot name pattern detected" in verdict.reasons

    def test_mobile_hotspot_custom_name(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(IPHONE, ssid="Upstairs"))
        assert verdict.confidence == 0.65
        assert "Default hotspot name pattern detected" not in verdict.reasons

    def test_duplicate_of_learned_network(self, rules, tracker):
        make_baseline(tracker, obs(ROUTER))
        verdict = evaluate(rules, tracker, obs(UNKNOWN, signal=-45))
        assert verdict.attack_type is AttackType.EVIL_TWIN
        assert verdict.confidence == 0.92
        assert verdict.reasons[0] == "EVIL TWIN ATTACK: Duplicate SSID of trusted network"
        assert f"Original network: {ROUTER}" in verdict.reasons

    def test_original_network_is_the_learned_peer(self, rules, tracker):
        tracker.record(obs(UNKNOWN_2))
        make_baseline(tracker, obs(ROUTER))
        verdict = evaluate(rules, tracker, obs(UNKNOWN))
        assert verdict.attack_type is AttackType.EVIL_TWIN
        assert f"Original network: {ROUTER}" in verdict.reasons
        assert f"Original network: {UNKNOWN_2}" not in verdict.reasons

    def test_duplicate_without_learned_peer_falls_through(self, rules, tracker):
        tracker.record(obs(UNKNOWN_2, ssid="Mesh"))
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="Mesh"))
        assert verdict.attack_type is AttackType.SAFE
        assert verdict.confidence == 0.0
        assert verdict.reasons == [
            "Multiple access points with same SSID: 'Mesh'",
            "Possible mesh network or evil twin",
        ]

    def test_fall_through_reasons_carry_into_later_rule(self, rules, tracker):
        tracker.record(obs(UNKNOWN_2, ssid="FreeWiFi"))
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="FreeWiFi"))
        assert verdict.attack_type is AttackType.ROGUE_AP
        assert verdict.confidence == 0.60
        assert verdict.reasons[0] == "Multiple access points with same SSID: 'FreeWiFi'"
        assert "Suspicious network name: 'FreeWiFi'" in verdict.reasons

    def test_hidden_strong_signal(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="", signal=-30))
        assert verdict.attack_type is AttackType.ROGUE_AP
        assert verdict.confidence == 0.70

    def test_hidden_weak_signal_not_flagged(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="", signal=-70))
        assert verdict.attack_type is AttackType.SAFE

    def test_locally_administered(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(LOCAL, ssid="Lab"))
        assert verdict.attack_type is AttackType.ROGUE_AP
        assert verdict.confidence == 0.60
        assert verdict.reasons[0] == "Locally administered (spoofed) MAC address"

    def test_suspicious_name(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="Free Airport WiFi"))
        assert verdict.attack_type is AttackType.ROGUE_AP
        assert verdict.confidence == 0.60

    def test_open_strong_signal(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="Cafe", signal=-55, capabilities=OPEN))
        assert verdict.attack_type is AttackType.ROGUE_AP
        assert verdict.confidence == 0.55
        assert "Unencrypted (open) network" in verdict.reasons

    def test_open_weak_signal_not_flagged(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="Cafe", signal=-75, capabilities=OPEN))
        assert verdict.attack_type is AttackType.SAFE

    def test_unknown_vendor_extreme_signal(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="Cafe", signal=-34))
        assert verdict.attack_type is AttackType.ROGUE_AP
        assert verdict.confidence == 0.50

    def test_default_is_safe(self, rules, tracker):
        verdict = evaluate(rules, tracker, obs(UNKNOWN, ssid="Cafe", signal=-70))
        assert verdict.attack_type is AttackType.SAFE
        assert verdict.confidence == 0.0
        assert verdict.reasons == []


class TestDeterminism:
    """The rule engine never mutates tracking state."""

    def test_repeated_evaluation_is_identical(self, rules, tracker):
        make_baseline(tracker, obs(ROUTER))
        observation = obs(UNKNOWN, signal=-45)
        tracker.record(observation)

        first = rules.evaluate(observation, tracker)
        second = rules.evaluate(observation, tracker)

        assert first == second
        assert tracker.profile(UNKNOWN).scan_count == 1
