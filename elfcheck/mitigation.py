"""Detection of binary hardening features: NX, PIE, RELRO and stack canaries."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional

from .elf_parser import ElfFile

PT_DYNAMIC = 2
PT_GNU_STACK = 0x6474E551
PT_GNU_RELRO = 0x6474E552
PF_X = 0x1
ET_DYN = 3

DT_NULL = 0
DT_BIND_NOW = 24
DT_FLAGS = 30
DT_FLAGS_1 = 0x6FFFFFFB
DF_BIND_NOW = 0x8
DF_1_NOW = 0x1

SHT_SYMTAB = 2
SHT_DYNSYM = 11

_DYN = "qQ"
_DYN_SIZE = 16
_SYM = "IBBHQQ"
_SYM_SIZE = 24


class Relro(IntEnum):
    NONE = 0
    PARTIAL = 1
    FULL = 2


@dataclass(frozen=True)
class Mitigation:
    nx: bool = False
    pie: bool = False
    relro: Relro = Relro.NONE
    canary: bool = False


def check_nx(elf: ElfFile) -> bool:
    """NX is off only when a GNU_STACK segment is executable."""
    for ph in elf.program_headers:
        if ph.type == PT_GNU_STACK:
            return not ph.flags & PF_X
    return True


def check_pie(elf: ElfFile) -> bool:
    return elf.header.type == ET_DYN


def _dynamic_entries(elf: ElfFile, offset: int, size: int) -> Iterator[tuple[int, int]]:
    usable = size // _DYN_SIZE * _DYN_SIZE
    yield from struct.iter_unpack(elf.byteorder + _DYN, elf.data[offset:offset + usable])


def check_relro(elf: ElfFile) -> Relro:
    has_relro = False
    dynamic: Optional[tuple[int, int]] = None

    for ph in elf.program_headers:
        if ph.type == PT_GNU_RELRO:
            has_relro = True
        if ph.type == PT_DYNAMIC and ph.offset + ph.filesz <= len(elf.data):
            dynamic = (ph.offset, ph.filesz)

    if not has_relro:
        return Relro.NONE
    if dynamic is None:
        return Relro.PARTIAL

    bind_now = False
    for tag, value in _dynamic_entries(elf, *dynamic):
        if tag == DT_NULL:
            break
        if tag == DT_BIND_NOW:
            bind_now = True
        elif tag == DT_FLAGS and value & DF_BIND_NOW:
            bind_now = True
        elif tag == DT_FLAGS_1 and value & DF_1_NOW:
            bind_now = True

    return Relro.FULL if bind_now else Relro.PARTIAL


def _symbol_name_offsets(elf: ElfFile, offset: int, count: int) -> Iterator[int]:
    end = min(offset + count * _SYM_SIZE, len(elf.data))
    usable = max(0, (end - offset) // _SYM_SIZE) * _SYM_SIZE
    for st_name, *_ in struct.iter_unpack(elf.byteorder + _SYM, elf.data[offset:offset + usable]):
        yield st_name


def check_canary(elf: ElfFile) -> bool:
    """A binary uses stack canaries when it references __stack_chk_fail."""
    size = len(elf.data)
    sections = elf.section_headers
    for sh in sections:
        if sh.type not in (SHT_DYNSYM, SHT_SYMTAB):
            continue
        if sh.offset + sh.size > size or sh.entsize == 0:
            continue
        if sh.link >= len(sections):
            continue
        strtab = sections[sh.link]
        if strtab.offset + strtab.size > size:
            continue
        for st_name in _symbol_name_offsets(elf, sh.offset, sh.size // sh.entsize):
            if st_name >= strtab.size:
                continue
            if elf.string_at(strtab.offset + st_name) == "__stack_chk_fail":
                return True
    return False


def analyze_mitigation(elf: Optional[ElfFile]) -> Mitigation:
    if elf is None:
        return Mitigation()
    return Mitigation(
        nx=check_nx(elf),
        pie=check_pie(elf),
        relro=check_relro(elf),
        canary=check_canary(elf),
    )