"""
NetTrust Console Interface
===========================

Rich-powered console abstraction giving every NetTrust command the same
presentation: a banner, section rules, severity-coloured status lines,
and a spinner for long-running work.

Threat levels map to theme styles of the same name (``trust.critical``,
``trust.high`` ...), so tables and status lines colour a verdict the same
way.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from contextlib import contextmanager
from typing import Any, Iterator

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.status import Status
from rich.text import Text
from rich.theme import Theme

_TRUST_THEME = Theme(
    {
        "trust.banner": "bold bright_cyan",
        "trust.section": "bold bright_magenta",
        "trust.success": "bold green",
        "trust.warning": "bold yellow",
        "trust.error": "bold red",
        "trust.info": "bold bright_blue",
        "trust.dim": "dim white",
        # threat levels
        "trust.critical": "bold white on red",
        "trust.high": "bold red",
        "trust.medium": "bold yellow",
        "trust.low": "bold bright_cyan",
        "trust.safe": "bold green",
        # verdicts
        "trust.evil_twin": "bold red",
        "trust.rogue_ap": "bold yellow",
    }
)

_BANNER_ART = r"""
[bright_cyan]
  _   _      _  _____                _
 | \ | | ___| ||_   _| __ _   _ ___| |_
 |  \| |/ _ \ __|| || '__| | | / __| __|
 | |\  |  __/ |_ | || |  | |_| \__ \ |_
 |_| \_|\___|\__||_||_|   \__,_|___/\__|
[/bright_cyan]"""

_TAGLINE = "Evil Twin & Rogue Access Point Detector"


def style_for(name: str) -> str:
    """Theme style for a threat level or verdict value (``"HIGH"``, ``"Evil_Twin"``)."""
    return f"trust.{name.lower()}"


class NetTrustConsole:
    """Console shared by the NetTrust commands.

    Usage::

        con = NetTrustConsole()
        con.banner()
        con.section("Detection Results")
        con.threat("CRITICAL", "1 critical threat detected")

    Args:
        quiet:  Suppress all output (scripted runs, tests).
        record: Keep a record of the output for export.
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        self._console = Console(
            theme=_TRUST_THEME, quiet=quiet, record=record, highlight=False
        )

    @property
    def rich(self) -> Console:
        return self._console

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    # ------------------------------------------------------------------ #
    #  Layout
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        stamp = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        body = Text.from_markup(
            f"{_BANNER_ART}\n[trust.banner]{_TAGLINE}[/trust.banner]\n"
            f"[trust.dim]v{version}  |  {stamp}[/trust.dim]"
        )
        self._console.print(
            Panel(Align.center(body), border_style="bright_cyan", padding=(1, 2))
        )

    def section(self, title: str) -> None:
        self._console.rule(f"  {title}  ", style="trust.section")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Status lines
    # ------------------------------------------------------------------ #

    def _emit(self, style: str, tag: str, message: str) -> None:
        self._console.print(f"[{style}]{tag}[/{style}] {message}")

    def success(self, message: str) -> None:
        self._emit("trust.success", "[✔]", message)

    def info(self, message: str) -> None:
        self._emit("trust.info", "[ℹ]", message)

    def warning(self, message: str) -> None:
        self._emit("trust.warning", "[⚠]", message)

    def error(self, message: str) -> None:
        self._emit("trust.error", "[✘] ERROR:", message)

    def threat(self, level: str, message: str) -> None:
        """Status line coloured by threat level (``SAFE`` ... ``CRITICAL``)."""
        self._emit(style_for(level), f"[{level}]", message)

    @contextmanager
    def status(self, message: str = "Working...") -> Iterator[Status]:
        """Spinner shown while the block runs."""
        with self._console.status(
            f"[trust.info]{message}[/trust.info]", spinner="dots"
        ) as spinner:
            yield spinner
