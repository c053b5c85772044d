"""Text rendering of scan and mitigation results."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .mitigation import Mitigation, Relro
from .vuln import VulnReport

_RELRO_LABELS = {
    Relro.NONE: "No RELRO",
    Relro.PARTIAL: "Partial RELRO",
    Relro.FULL: "Full RELRO",
}


def format_vuln(report: VulnReport) -> str:
    lines = [
        "===== Vulnerability Scan Result =====",
        f"has_gets        : {int(report.has_gets)}",
        f"has_strcpy      : {int(report.has_strcpy)}",
        f"has_rwx_segment : {int(report.has_rwx_segment)}",
        f"message count   : {report.count}",
    ]
    lines += [f"[{number}] {msg}" for number, msg in enumerate(report.messages, start=1) if msg]
    return "\n".join(lines) + "\n"


def format_result(mitigation: Mitigation) -> str:
    switches = (("NX", mitigation.nx), ("PIE", mitigation.pie))
    lines = [f"{label}: {'Enabled' if enabled else 'Disabled'}" for label, enabled in switches]
    lines.append(f"RELRO: {_RELRO_LABELS.get(mitigation.relro, 'Full RELRO')}")
    lines.append(f"Canary: {'Enabled' if mitigation.canary else 'Disabled'}")
    return "\n".join(lines) + "\n"


def print_vuln(report: VulnReport, file: Optional[TextIO] = None) -> None:
    (file or sys.stdout).write(format_vuln(report))


def print_result(mitigation: Mitigation, file: Optional[TextIO] = None) -> None:
    (file or sys.stdout).write(format_result(mitigation))