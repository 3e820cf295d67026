"""
NetTrust CLI
=============

Click-based command-line interface for the NetTrust access-point
classifier. Replays recorded wireless scans through the detection engine
and reports Evil Twin and Rogue AP verdicts.

Commands:
    nettrust detect SCAN_FILE     Classify the access points in a scan file
    nettrust info                 Show model status

Common options:
    --model-dir DIR     Directory holding the model parameter files
    --output PATH       JSON report path
    --report            JSON report in the configured output_dir
    --rounds N          Replay the scan N times (learns baselines)
    --workers N         Worker threads for batch detection

Exit codes (detect):
    0   no threats above LOW/MEDIUM
    1   at least one HIGH result, or an input error
    2   at least one CRITICAL result

References:
    - Click Documentation: https://click.palletsprojects.com/
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from shared.config import NetTrustConfig
from shared.console import NetTrustConsole
from shared.logger import configure_logging


# ---------------------------------------------------------------------------
# CLI Group
# ---------------------------------------------------------------------------


@click.group(
    name="nettrust",
    help=(
        "NETTRUST - Evil Twin & Rogue AP Detector\n\n"
        "Classify wireless access points as Safe, Evil Twin or Rogue AP "
        "using device fingerprinting, heuristics, a statistical scorer "
        "and persistent evidence tracking."
    ),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to NetTrust configuration file (TOML).",
)
@click.option(
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress console output (report only).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """NetTrust detector - main CLI entry point."""
    ctx.ensure_object(dict)

    try:
        config = NetTrustConfig.load(config_path)
    except (FileNotFoundError, ValueError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    settings = config.global_settings
    configure_logging(
        log_level="DEBUG" if verbose or settings.debug else settings.log_level,
        log_file=settings.log_file or None,
        json_logs=settings.log_json,
        console_output=not quiet,
    )

    ctx.obj["config"] = config
    ctx.obj["console"] = NetTrustConsole(quiet=quiet)
    ctx.obj["quiet"] = quiet


# ---------------------------------------------------------------------------
# Detect Command
# ---------------------------------------------------------------------------


@cli.command(
    name="detect",
    help=(
        "Classify the access points in a recorded scan.\n\n"
        "SCAN_FILE is a JSON list of access points, a JSON list of scan "
        "rounds, or a CSV file with an ssid,bssid,frequency,signal_dbm "
        "header. Trusted networks are learned after three clean scans, "
        "so use --rounds to replay a single-round scan."
    ),
)
@click.argument("scan_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--model-dir", "-m",
    type=click.Path(file_okay=False),
    default=None,
    help="Model parameter directory (defaults to the configured model_dir).",
)
@click.option(
    "--rounds", "-r",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of times to replay the scan file.",
)
@click.option(
    "--workers", "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads per scan round (defaults to the configured max_workers).",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a JSON report to this path.",
)
@click.option(
    "--report",
    is_flag=True,
    default=False,
    help="Write a timestamped JSON report into the configured output_dir.",
)
@click.pass_context
def detect(
    ctx: click.Context,
    scan_file: str,
    model_dir: Optional[str],
    rounds: int,
    workers: Optional[int],
    output: Optional[str],
    report: bool,
) -> None:
    """Replay SCAN_FILE through the detection engine."""
    config: NetTrustConfig = ctx.obj["config"]
    console: NetTrustConsole = ctx.obj["console"]

    from nettrust.collectors.scan_reader import ScanFormatError, read_scan_rounds
    from nettrust.core.engine import DetectionEngine
    from nettrust.core.models import ThreatLevel
    from nettrust.output.console import NetTrustConsoleOutput
    from nettrust.output.report import NetTrustReportGenerator

    console.banner(config.global_settings.version)

    try:
        scan_rounds = read_scan_rounds(scan_file)
    except ScanFormatError as exc:
        console.error(str(exc))
        sys.exit(1)

    engine = DetectionEngine.from_directory(model_dir, config.detection)
    if not engine.is_loaded():
        console.error("Detection model not loaded")
        sys.exit(1)

    max_workers = workers or config.global_settings.max_workers
    results = []
    with console.status("Classifying access points..."):
        for _ in range(rounds):
            for scan_round in scan_rounds:
                results = engine.detect_batch(scan_round, max_workers=max_workers)

    summary = engine.summarize(results)
    display = NetTrustConsoleOutput(console)
    display.display_results(results)
    display.display_summary(summary)
    display.display_learned(engine.get_learned_networks())

    if output is None and report:
        output = _default_report_path(config.global_settings.output_dir)

    if output:
        generator = NetTrustReportGenerator(config.global_settings.version)
        path = generator.generate_json(
            results,
            summary,
            output,
            model_info=engine.get_model_info(),
            learned=engine.get_learned_networks(),
            source=str(Path(scan_file).resolve()),
        )
        console.success(f"Report written to {path}")

    if summary.critical > 0:
        sys.exit(2)
    elif any(r.threat_level is ThreatLevel.HIGH for r in results):
        sys.exit(1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _default_report_path(output_dir: str) -> str:
    """Timestamped report path inside *output_dir*."""
    from datetime import datetime
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return str(Path(output_dir) / f"nettrust_report_{timestamp}.json")


# ---------------------------------------------------------------------------
# Info Command
# ---------------------------------------------------------------------------


@cli.command(name="info", help="Show model parameters and detector settings.")
@click.option(
    "--model-dir", "-m",
    type=click.Path(file_okay=False),
    default=None,
    help="Model parameter directory (defaults to the configured model_dir).",
)
@click.pass_context
def info(ctx: click.Context, model_dir: Optional[str]) -> None:
    """Display model status."""
    config: NetTrustConfig = ctx.obj["config"]
    console: NetTrustConsole = ctx.obj["console"]

    from nettrust.core.engine import DetectionEngine
    from nettrust.output.console import NetTrustConsoleOutput

    engine = DetectionEngine.from_directory(model_dir, config.detection)
    NetTrustConsoleOutput(console).display_model_info(engine.get_model_info())

    if not engine.is_loaded():
        sys.exit(1)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Entry point for the NetTrust CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
