"""Reading of 64-bit ELF files into headers plus the raw file bytes."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import Optional, Union

ELFMAG = b"\x7fELF"
EI_DATA = 5
ELFDATA2MSB = 2
SHN_UNDEF = 0

_EHDR = "16sHHIQQQIHHHHHH"
_PHDR = "IIQQQQQQ"
_SHDR = "IIQQQQIIQQ"


class ElfError(ValueError):
    """Raised when bytes cannot be read as a 64-bit ELF file."""


@dataclass(frozen=True)
class ElfHeader:
    ident: bytes
    type: int
    machine: int
    version: int
    entry: int
    phoff: int
    shoff: int
    flags: int
    ehsize: int
    phentsize: int
    phnum: int
    shentsize: int
    shnum: int
    shstrndx: int


@dataclass(frozen=True)
class ProgramHeader:
    type: int
    flags: int
    offset: int
    vaddr: int
    paddr: int
    filesz: int
    memsz: int
    align: int


@dataclass(frozen=True)
class SectionHeader:
    name: int
    type: int
    flags: int
    addr: int
    offset: int
    size: int
    link: int
    info: int
    addralign: int
    entsize: int


@dataclass
class ElfFile:
    """A parsed ELF file: its headers and the bytes they describe."""

    header: ElfHeader
    program_headers: list[ProgramHeader] = field(default_factory=list)
    section_headers: list[SectionHeader] = field(default_factory=list)
    data: bytes = b""
    shstrtab: Optional[int] = None
    byteorder: str = "<"

    def string_at(self, offset: int) -> str:
        """Return the NUL-terminated string starting at a file offset."""
        if offset < 0 or offset >= len(self.data):
            return ""
        end = self.data.find(b"\0", offset)
        if end < 0:
            end = len(self.data)
        return self.data[offset:end].decode("utf-8", "replace")

    def section_name(self, section: SectionHeader) -> str:
        """Return a section's name, or an empty string without a name table."""
        if self.shstrtab is None:
            return ""
        return self.string_at(self.shstrtab + section.name)

    def find_section(self, name: str) -> Optional[SectionHeader]:
        """Return the first section with the given name, if any."""
        if self.shstrtab is None:
            return None
        return next(
            (s for s in self.section_headers if self.section_name(s) == name),
            None,
        )


def _unpack(fmt: str, data: bytes, offset: int, byteorder: str, what: str) -> tuple:
    fmt = byteorder + fmt
    if offset < 0 or offset + struct.calcsize(fmt) > len(data):
        raise ElfError(f"{what} lies outside the file")
    return struct.unpack_from(fmt, data, offset)


def parse_bytes(data: Union[bytes, bytearray, memoryview]) -> ElfFile:
    """Parse the bytes of a 64-bit ELF file."""
    data = bytes(data)
    if len(data) < struct.calcsize("<" + _EHDR) or data[:4] != ELFMAG:
        raise ElfError("Not an ELF file")
    byteorder = ">" if data[EI_DATA] == ELFDATA2MSB else "<"

    header = ElfHeader(*_unpack(_EHDR, data, 0, byteorder, "ELF header"))

    phsize = struct.calcsize("<" + _PHDR)
    program_headers = [
        ProgramHeader(*_unpack(_PHDR, data, header.phoff + i * phsize, byteorder, "program header"))
        for i in range(header.phnum)
    ]

    shsize = struct.calcsize("<" + _SHDR)
    section_headers = [
        SectionHeader(*_unpack(_SHDR, data, header.shoff + i * shsize, byteorder, "section header"))
        for i in range(header.shnum)
    ]

    shstrtab = None
    if header.shstrndx != SHN_UNDEF and header.shstrndx < len(section_headers):
        shstrtab = section_headers[header.shstrndx].offset

    return ElfFile(
        header=header,
        program_headers=program_headers,
        section_headers=section_headers,
        data=data,
        shstrtab=shstrtab,
        byteorder=byteorder,
    )


def parse_elf(filename: Union[str, os.PathLike]) -> ElfFile:
    """Read and parse an ELF file from disk."""
    with open(filename, "rb") as handle:
        return parse_bytes(handle.read())