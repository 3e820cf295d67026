"""
NetTrust Report Generator
==========================

Structured JSON reports of a detection run for integration with other
tools: summary statistics, model status, per-network results and the
learned baseline networks.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from shared.logger import TrustLogger

from nettrust.core.models import DetectionResult, ScanSummary

logger = TrustLogger("output.report")


class _NetTrustJSONEncoder(json.JSONEncoder):
    """JSON encoder handling NetTrust model serialization."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, datetime):
            return obj.isoformat()
        if hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        if hasattr(obj, "value"):  # Enum
            return obj.value
        return super().default(obj)


class NetTrustReportGenerator:
    """Writes detection runs to JSON.

    Usage::

        gen = NetTrustReportGenerator(version="1.0.0")
        path = gen.generate_json(results, summary, "output/report.json")
    """

    def __init__(self, version: str = "1.0.0") -> None:
        self._version = version

    def build(
        self,
        results: Sequence[DetectionResult],
        summary: ScanSummary,
        *,
        model_info: Optional[dict[str, Any]] = None,
        learned: Optional[Sequence[tuple[str, str]]] = None,
        source: Optional[str] = None,
    ) -> dict[str, Any]:
        """Report payload as plain JSON-compatible data."""
        return {
            "tool": "nettrust",
            "version": self._version,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "summary": summary.model_dump(mode="json"),
            "model": model_info or {},
            "results": [r.model_dump(mode="json") for r in results],
            "learned_networks": [
                {"ssid": ssid, "bssid": bssid} for ssid, bssid in (learned or [])
            ],
        }

    def generate_json(
        self,
        results: Sequence[DetectionResult],
        summary: ScanSummary,
        output_path: str | Path,
        **kwargs: Any,
    ) -> str:
        """Write the report and return its absolute path.

        Keyword arguments are passed to :meth:`build`.
        """
        report_data = self.build(results, summary, **kwargs)

        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(report_data, cls=_NetTrustJSONEncoder, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

        logger.info("JSON report generated: %s", output)
        return str(output.resolve())
