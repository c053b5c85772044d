"""Scanning of symbol tables for calls to risky C library functions."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .elf_parser import ElfFile

MAX_VULN = 32

_SYM = "IBBHQQ"
_SYM_SIZE = 24


@dataclass(frozen=True)
class DangerFunc:
    name: str
    category: str
    severity: str


DANGER_FUNCS: tuple[DangerFunc, ...] = (
    DangerFunc("gets", "buffer overflow", "HIGH"),
    DangerFunc("strcpy", "buffer overflow", "HIGH"),
    DangerFunc("strcat", "buffer overflow", "HIGH"),
    DangerFunc("sprintf", "buffer overflow", "HIGH"),
    DangerFunc("vsprintf", "buffer overflow", "HIGH"),
    DangerFunc("scanf", "input handling", "MEDIUM"),
    DangerFunc("fscanf", "input handling", "MEDIUM"),
    DangerFunc("sscanf", "input handling", "MEDIUM"),
    DangerFunc("memcpy", "memory copy", "MEDIUM"),
    DangerFunc("read", "raw input", "MEDIUM"),
    DangerFunc("recv", "network input", "MEDIUM"),
    DangerFunc("system", "command exec", "HIGH"),
    DangerFunc("popen", "command exec", "HIGH"),
)

_BY_NAME = {func.name: func for func in DANGER_FUNCS}


def find_danger_func(name: Optional[str]) -> Optional[DangerFunc]:
    if name is None:
        return None
    return _BY_NAME.get(name)


@dataclass
class VulnReport:
    has_gets: bool = False
    has_strcpy: bool = False
    has_rwx_segment: bool = False
    messages: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.messages)

    def record(self, func_name: str, table_name: str) -> None:
        """Note a dangerous function; messages stop at MAX_VULN, flags do not."""
        if func_name == "gets":
            self.has_gets = True
        elif func_name == "strcpy":
            self.has_strcpy = True
        if len(self.messages) < MAX_VULN:
            self.messages.append(f"dangerous function found: {func_name} in {table_name}")


def _symbol_name_offsets(elf: ElfFile, offset: int, count: int) -> Iterator[int]:
    end = min(offset + count * _SYM_SIZE, len(elf.data))
    usable = max(0, (end - offset) // _SYM_SIZE) * _SYM_SIZE
    for st_name, *_ in struct.iter_unpack(elf.byteorder + _SYM, elf.data[offset:offset + usable]):
        yield st_name


def scan_symbol_table(elf: ElfFile, symsec_name: str, strsec_name: str, report: VulnReport) -> None:
    """Record every dangerous function named in the given symbol table."""
    sym_sh = elf.find_section(symsec_name)
    str_sh = elf.find_section(strsec_name)
    if sym_sh is None or str_sh is None or sym_sh.entsize == 0:
        return

    for st_name in _symbol_name_offsets(elf, sym_sh.offset, sym_sh.size // sym_sh.entsize):
        if st_name == 0:
            continue
        name = elf.string_at(str_sh.offset + st_name)
        if not name:
            continue
        danger = find_danger_func(name)
        if danger is not None:
            report.record(danger.name, symsec_name)


def analyze_vulnerability(elf: Optional[ElfFile]) -> VulnReport:
    report = VulnReport()
    if elf is None:
        return report
    scan_symbol_table(elf, ".dynsym", ".dynstr", report)
    scan_symbol_table(elf, ".symtab", ".strtab", report)
    return report