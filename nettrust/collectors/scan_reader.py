"""
NetTrust Scan File Reader
==========================

Loads recorded wireless scans into :class:`Observation` rounds. A round
is one pass of the scanner; replaying several rounds lets the evidence
tracker learn baselines and confirm persistent attacks offline.

Accepted formats:
    - JSON list of access-point objects (one round)
    - JSON list of such lists (several rounds)
    - CSV with a header ``ssid,bssid,frequency,signal_dbm[,channel,capabilities]``
      (one round)

Field aliases follow the platform scan APIs: ``SSID``/``BSSID`` and
``level``/``signal`` for the signal strength.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shared.logger import TrustLogger

from nettrust.core.models import Observation

logger = TrustLogger("collectors.scan_reader")

_ALIASES: dict[str, str] = {
    "SSID": "ssid",
    "BSSID": "bssid",
    "level": "signal_dbm",
    "signal": "signal_dbm",
    "rssi": "signal_dbm",
    "freq": "frequency",
}


class ScanFormatError(Exception):
    """A scan file could not be read or contains an invalid record."""


def _normalize_record(raw: dict[str, Any]) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for key, value in raw.items():
        if value == "" and key not in ("ssid", "SSID", "capabilities"):
            continue
        record[_ALIASES.get(key, key)] = value
    return record


def parse_observation(raw: dict[str, Any], source: str = "<scan>") -> Observation:
    """Build one observation from a scan record.

    Raises:
        ScanFormatError: If the record fails validation.
    """
    try:
        return Observation.model_validate(_normalize_record(raw))
    except ValidationError as exc:
        raise ScanFormatError(f"Invalid scan record in {source}: {exc}") from exc


def _read_json(path: Path) -> list[list[Observation]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ScanFormatError(f"Malformed JSON in {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("results", data.get("networks"))
    if not isinstance(data, list):
        raise ScanFormatError(f"{path}: expected a list of access points")

    if data and all(isinstance(item, list) for item in data):
        raw_rounds = data
    else:
        raw_rounds = [data]

    rounds: list[list[Observation]] = []
    for raw_round in raw_rounds:
        observations = []
        for item in raw_round:
            if not isinstance(item, dict):
                raise ScanFormatError(f"{path}: access point entries must be objects")
            observations.append(parse_observation(item, str(path)))
        rounds.append(observations)
    return rounds


def _read_csv(path: Path) -> list[list[Observation]]:
    with open(path, "r", encoding="utf-8", newline="") as fh:
        reader = csv.DictReader(fh)
        if not reader.fieldnames:
            raise ScanFormatError(f"{path}: missing CSV header")
        return [[parse_observation(row, str(path)) for row in reader]]


def read_scan_rounds(path: str | Path) -> list[list[Observation]]:
    """Read every scan round stored in *path*.

    Raises:
        ScanFormatError: If the file is missing, unreadable or invalid.
    """
    scan_path = Path(path)
    if not scan_path.is_file():
        raise ScanFormatError(f"Scan file not found: {scan_path}")

    try:
        if scan_path.suffix.lower() == ".csv":
            rounds = _read_csv(scan_path)
        else:
            rounds = _read_json(scan_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ScanFormatError(f"Cannot read {scan_path}: {exc}") from exc

    logger.debug(
        "Read %d round(s), %d observation(s) from %s",
        len(rounds), sum(len(r) for r in rounds), scan_path,
    )
    return rounds


def read_scan(path: str | Path) -> list[Observation]:
    """Read *path* as a flat list of observations, rounds concatenated."""
    return [obs for scan_round in read_scan_rounds(path) for obs in scan_round]
