"""
NetTrust Console Output
========================

Rich tables and panels for detection results, the scan summary, model
status and learned (baseline) networks.

References:
    - Rich library: https://github.com/Textualize/rich
    - NetTrust Console: shared.console.NetTrustConsole
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from rich.panel import Panel
from rich.table import Table

from shared.console import NetTrustConsole, style_for

from nettrust.core.models import HIDDEN_NETWORK_NAME, DetectionResult, ScanSummary


class NetTrustConsoleOutput:
    """Rich-based display of NetTrust detection output.

    Usage::

        output = NetTrustConsoleOutput()
        output.display_results(results)
        output.display_summary(engine.summarize(results))
    """

    def __init__(self, console: Optional[NetTrustConsole] = None) -> None:
        self._console = console or NetTrustConsole()

    def display_results(
        self,
        results: Sequence[DetectionResult],
        show_reasons: bool = True,
    ) -> None:
        """Results table, most severe first."""
        self._console.section("Detection Results")
        if not results:
            self._console.info("No access points in scan")
            return

        table = Table(
            title=f"Access Points ({len(results)})",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        table.add_column("Network", style="bold", max_width=28)
        table.add_column("BSSID", style="dim", width=17)
        table.add_column("Device", max_width=30)
        table.add_column("Signal", justify="right", width=8)
        table.add_column("Ch", justify="right", width=4)
        table.add_column("Verdict", width=10)
        table.add_column("Conf", justify="right", width=6)
        table.add_column("Threat", width=10)
        table.add_column("Action", ratio=2)

        ordered = sorted(
            results, key=lambda r: (-r.threat_level.rank, -r.confidence)
        )
        for result in ordered:
            level_style = style_for(result.threat_level.value)
            verdict_style = style_for(result.attack_type.value)
            action = result.recommended_action
            if show_reasons and result.reasons:
                action += "\n" + "\n".join(f"[dim]- {r}[/dim]" for r in result.reasons)
            network = result.network_name
            if result.is_baseline:
                network += " [green](trusted)[/green]"
            table.add_row(
                network,
                result.bssid,
                result.vendor,
                f"{result.signal_strength} dBm",
                str(result.channel),
                f"[{verdict_style}]{result.attack_type.value}[/]",
                f"{result.confidence:.0%}",
                f"[{level_style}]{result.threat_level.value}[/]",
                action,
            )

        self._console.rich.print(table)
        self._console.print()

    def display_summary(self, summary: ScanSummary) -> None:
        self._console.section("Scan Summary")

        table = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
            padding=(0, 2),
        )
        table.add_column("Metric", style="bold")
        table.add_column("Value", style="bright_white")
        table.add_row("Networks", str(summary.total))
        table.add_row("Threats", str(summary.threats))
        table.add_row("Rogue / Evil Twin", str(summary.rogue_aps))
        table.add_row("Critical", str(summary.critical))
        table.add_row("Trusted (learned)", str(summary.baseline))
        for attack, count in summary.by_attack.items():
            table.add_row(f"  [{style_for(attack)}]{attack}[/]", str(count))

        self._console.rich.print(table)
        self._console.print()

        if summary.critical:
            self._console.threat("CRITICAL", f"{summary.critical} critical threat(s) detected")
        elif summary.threats:
            self._console.threat("HIGH", f"{summary.threats} suspicious network(s) detected")
        else:
            self._console.threat("SAFE", "No threats detected")

    def display_model_info(self, info: dict[str, Any]) -> None:
        self._console.section("Model Status")
        if not info.get("loaded"):
            self._console.error("Detection model not loaded")

        thresholds = info.get("thresholds", {})
        lines = [
            f"[bold]Model version:[/bold] {info.get('model_version') or '-'}",
            f"[bold]Features:[/bold] {info.get('feature_count', 0)} WiFi packet features",
            f"[bold]Model accuracy:[/bold] {info.get('accuracy', 0.0):.2f}%",
            f"[bold]Thresholds:[/bold] "
            + ", ".join(f"{k} {v:.0%}" for k, v in thresholds.items()),
            f"[bold]Vendor prefixes:[/bold] {info.get('vendors', 0)}",
            "",
            f"[bold]Tracked APs:[/bold] {info.get('tracked', 0)}",
            f"[bold]Learned APs:[/bold] {info.get('learned', 0)}",
            "",
            "[dim]Results may not be 100% accurate. "
            "Use as guidance, not absolute truth.[/dim]",
        ]
        self._console.rich.print(
            Panel("\n".join(lines), border_style="bright_cyan", padding=(1, 2))
        )

    def display_learned(self, networks: Sequence[tuple[str, str]]) -> None:
        self._console.section("Learned Networks")
        if not networks:
            self._console.info("No trusted networks learned yet (needs 3+ clean scans)")
            return

        table = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        table.add_column("SSID", style="bold")
        table.add_column("BSSID", style="dim")
        for ssid, bssid in networks:
            table.add_row(ssid or HIDDEN_NETWORK_NAME, bssid)
        self._console.rich.print(table)
        self._console.print()
