"""
Unit tests for the model loader and scan file reader.
"""

import json

import pytest

from nettrust.collectors.model_loader import ModelConfigError, load_model_bundle
from nettrust.collectors.scan_reader import (
    ScanFormatError,
    parse_observation,
    read_scan,
    read_scan_rounds,
)
from nettrust.core.engine import DetectionEngine

from tests.helpers import FEATURE_NAMES, ROUTER, UNKNOWN


class TestModelLoader:
    """Tests for load_model_bundle."""

    def test_load(self, model_dir):
        bundle = load_model_bundle(model_dir)
        assert bundle.feature_names == tuple(FEATURE_NAMES)
        assert bundle.mean == (0.5,) * len(FEATURE_NAMES)
        assert bundle.scale == (2.0,) * len(FEATURE_NAMES)
        assert bundle.accuracy == pytest.approx(0.8867)
        assert bundle.model_version == "6.0"
        assert bundle.feature_count == len(FEATURE_NAMES)

    def test_metadata_is_optional(self, model_dir):
        (model_dir / "model_metadata.json").unlink()
        bundle = load_model_bundle(model_dir)
        assert bundle.accuracy == 0.0
        assert bundle.model_version == "unknown"

    def test_null_metadata_fields_still_load(self, model_dir):
        (model_dir / "model_metadata.json").write_text(
            json.dumps({"model_version": None, "performance": {"test_accuracy": None}})
        )
        bundle = load_model_bundle(model_dir)
        assert bundle.accuracy == 0.0
        assert bundle.model_version == "unknown"
        assert DetectionEngine.from_directory(model_dir).is_loaded()

    @pytest.mark.parametrize("accuracy", [88.67, "high", True, [0.9]])
    def test_unusable_accuracy_reads_as_zero(self, model_dir, accuracy):
        (model_dir / "model_metadata.json").write_text(
            json.dumps({"performance": {"test_accuracy": accuracy}})
        )
        assert load_model_bundle(model_dir).accuracy == 0.0

    def test_non_object_metadata_is_ignored(self, model_dir):
        (model_dir / "model_metadata.json").write_text("[]")
        assert load_model_bundle(model_dir).feature_count == len(FEATURE_NAMES)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ModelConfigError, match="directory not found"):
            load_model_bundle(tmp_path / "nope")

    def test_missing_required_file(self, model_dir):
        (model_dir / "feature_names.json").unlink()
        with pytest.raises(ModelConfigError, match="not found"):
            load_model_bundle(model_dir)

    def test_malformed_json(self, model_dir):
        (model_dir / "scaler_params.json").write_text("{not json")
        with pytest.raises(ModelConfigError, match="Malformed JSON"):
            load_model_bundle(model_dir)

    def test_length_mismatch(self, model_dir):
        (model_dir / "scaler_params.json").write_text(
            json.dumps({"mean": [0.0], "scale": [1.0]})
        )
        with pytest.raises(ModelConfigError, match="Invalid model parameters"):
            load_model_bundle(model_dir)

    def test_scaler_must_be_object(self, model_dir):
        (model_dir / "scaler_params.json").write_text("[1, 2]")
        with pytest.raises(ModelConfigError):
            load_model_bundle(model_dir)

    def test_bundled_assets_load(self):
        from pathlib import Path

        assets = Path(__file__).resolve().parent.parent / "assets" / "model"
        bundle = load_model_bundle(assets)
        assert bundle.feature_count == 25


class TestScanReader:
    """Tests for the JSON and CSV scan readers."""

    def test_json_single_round(self, tmp_path):
        path = tmp_path / "scan.json"
        path.write_text(json.dumps([
            {"SSID": "HomeNet", "BSSID": "F4:EC:38:12:34:56", "frequency": 2437, "level": -50},
            {"ssid": "", "bssid": UNKNOWN, "frequency": 5180, "signal_dbm": -30},
        ]))
        rounds = read_scan_rounds(path)
        assert len(rounds) == 1
        first, second = rounds[0]
        assert first.bssid == ROUTER
        assert first.signal_dbm == -50
        assert first.channel == 6
        assert second.is_hidden
        assert second.channel == 36

    def test_json_multiple_rounds(self, tmp_path):
        record = {"ssid": "HomeNet", "bssid": ROUTER, "frequency": 2437, "signal": -50}
        path = tmp_path / "rounds.json"
        path.write_text(json.dumps([[record], [record, record]]))
        rounds = read_scan_rounds(path)
        assert [len(r) for r in rounds] == [1, 2]
        assert len(read_scan(path)) == 3

    def test_json_wrapped_in_object(self, tmp_path):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({
            "networks": [{"ssid": "x", "bssid": ROUTER, "frequency": 2412, "rssi": -60}],
        }))
        assert read_scan(path)[0].channel == 1

    def test_csv(self, tmp_path):
        path = tmp_path / "scan.csv"
        path.write_text(
            "ssid,bssid,frequency,signal_dbm,channel,capabilities\n"
            "HomeNet,f4:ec:38:12:34:56,2437,-50,,[WPA2-PSK-CCMP][ESS]\n"
            ",00:11:22:33:44:55,5180,-30,36,\n"
        )
        observations = read_scan(path)
        assert len(observations) == 2
        assert observations[0].channel == 6
        assert observations[0].capabilities == "[WPA2-PSK-CCMP][ESS]"
        assert observations[1].ssid == ""
        assert observations[1].capabilities == ""

    def test_explicit_channel_is_kept(self):
        o = parse_observation({"bssid": ROUTER, "frequency": 2437, "level": -50, "channel": 11})
        assert o.channel == 11

    def test_invalid_record(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"ssid": "x", "bssid": ROUTER, "frequency": "abc", "level": -50}]))
        with pytest.raises(ScanFormatError, match="Invalid scan record"):
            read_scan(path)

    def test_missing_required_field(self):
        with pytest.raises(ScanFormatError):
            parse_observation({"ssid": "x", "frequency": 2437, "level": -50})

    def test_non_list_document(self, tmp_path):
        path = tmp_path / "scalar.json"
        path.write_text("42")
        with pytest.raises(ScanFormatError, match="expected a list"):
            read_scan(path)

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")
        with pytest.raises(ScanFormatError, match="Malformed JSON"):
            read_scan(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScanFormatError, match="not found"):
            read_scan(tmp_path / "absent.json")
