import itertools
import struct

import pytest

from elfcheck.elf_parser import parse_bytes
from elfcheck.vuln import (
    MAX_VULN,
    VulnReport,
    analyze_vulnerability,
    find_danger_func,
    scan_symbol_table,
)


def _image(sections):
    """Parse an image holding only the given sections plus a section name table."""
    entries = [*sections, (".shstrtab", 3, None, 0, 0)]
    name_offsets, names = [], b"\0"
    for name, *_ in entries:
        name_offsets.append(len(names))
        names += name.encode() + b"\0"
    out = bytearray(64)
    headers = [bytes(64)]
    for name_off, (_, kind, payload, link, entsize) in zip(name_offsets, entries):
        payload = names if payload is None else payload
        headers.append(struct.pack("<IIQQQQIIQQ", name_off, kind, 0, 0, len(out), len(payload), link, 0, 8, entsize))
        out += payload
    shoff = len(out)
    out += b"".join(headers)
    struct.pack_into(
        "<16sHHIQQQIHHHHHH", out, 0, b"\x7fELF\x02\x01\x01" + bytes(9), 2, 62, 1, 0, 0, shoff,
        0, 64, 56, 0, 64, len(headers), len(headers) - 1,
    )
    return parse_bytes(bytes(out))


def _symtab(names):
    strtab = b"\0" + b"".join(n.encode() + b"\0" for n in names)
    offsets = itertools.accumulate((len(n) + 1 for n in names), initial=1)
    table = bytes(24) + b"".join(struct.pack("<IBBHQQ", off, 0x12, 0, 0, 0, 0) for off, _ in zip(offsets, names))
    return strtab, table


def elf_with(dyn=(), static=()):
    sections = []
    for names, str_name, sym_name, sym_type in ((dyn, ".dynstr", ".dynsym", 11), (static, ".strtab", ".symtab", 2)):
        if names:
            strtab, table = _symtab(names)
            link = len(sections) + 1
            sections += [(str_name, 3, strtab, 0, 0), (sym_name, sym_type, table, link, 24)]
    return _image(sections)


def test_find_danger_func():
    assert find_danger_func("gets").severity == "HIGH"
    assert find_danger_func("system").category == "command exec"
    assert find_danger_func("scanf").severity == "MEDIUM"
    assert find_danger_func("printf") is None
    assert find_danger_func(None) is None


def test_dynsym_scan():
    report = analyze_vulnerability(elf_with(dyn=["puts", "gets", "strcpy"]))
    assert report.has_gets is True
    assert report.has_strcpy is True
    assert report.has_rwx_segment is False
    assert report.messages == [
        "dangerous function found: gets in .dynsym",
        "dangerous function found: strcpy in .dynsym",
    ]
    assert report.count == 2


def test_dynsym_before_symtab():
    report = analyze_vulnerability(elf_with(dyn=["system"], static=["memcpy"]))
    assert report.messages == [
        "dangerous function found: system in .dynsym",
        "dangerous function found: memcpy in .symtab",
    ]
    assert report.has_gets is False


def test_clean_binary():
    assert analyze_vulnerability(elf_with(dyn=["puts", "printf"])) == VulnReport()


def test_none_elf():
    assert analyze_vulnerability(None).count == 0


def test_zero_entsize_skipped():
    strtab, table = _symtab(["gets"])
    elf = _image([(".dynstr", 3, strtab, 0, 0), (".dynsym", 11, table, 1, 0)])
    report = VulnReport()
    scan_symbol_table(elf, ".dynsym", ".dynstr", report)
    assert report.messages == []
    assert report.has_gets is False


def test_missing_string_table():
    _, table = _symtab(["gets"])
    elf = _image([(".dynsym", 11, table, 0, 24)])
    report = VulnReport()
    scan_symbol_table(elf, ".dynsym", ".dynstr", report)
    assert report.count == 0


def test_record_caps_messages():
    report = VulnReport()
    for _ in range(MAX_VULN + 8):
        report.record("read", ".dynsym")
    report.record("gets", ".symtab")
    assert report.count == MAX_VULN
    assert report.has_gets is True
    assert all(msg == "dangerous function found: read in .dynsym" for msg in report.messages)


@pytest.mark.parametrize("name", ["gets", "strcpy"])
def test_record_sets_flag(name):
    report = VulnReport()
    report.record(name, ".dynsym")
    assert getattr(report, f"has_{name}") is True