"""Command line entry point: report mitigations and risky imports of an ELF file."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .elf_parser import ElfError, parse_elf
from .mitigation import analyze_mitigation
from .report import print_result, print_vuln
from .vuln import analyze_vulnerability


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="elfcheck",
        description="Check an ELF binary for hardening features and dangerous functions.",
    )
    parser.add_argument("file", help="path of the ELF file to inspect")
    args = parser.parse_args(argv)

    try:
        elf = parse_elf(args.file)
    except OSError as exc:
        print(f"open: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except ElfError as exc:
        print(exc, file=sys.stderr)
        return 1

    mitigation = analyze_mitigation(elf)
    report = analyze_vulnerability(elf)

    print_vuln(report)
    print_result(mitigation)
    return 0


if __name__ == "__main__":
    sys.exit(main())