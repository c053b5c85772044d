# elfcheck

`elfcheck` inspects a 64-bit ELF binary. It reports which exploit
mitigations the binary was built with and which risky C library functions
appear in its symbol tables. Both little- and big-endian files are read.

## Installation

```
pip install .
```

## Command line

```
elfcheck /path/to/binary
```

The output looks like this:

```
===== Vulnerability Scan Result =====
has_gets        : 1
has_strcpy      : 0
has_rwx_segment : 0
message count   : 1
[1] dangerous function found: gets in .dynsym
NX: Enabled
PIE: Enabled
RELRO: Full RELRO
Canary: Enabled
```

If the file cannot be opened, or is not an ELF file, a message is written
to standard error and the command exits with status 1.

### Mitigations (`elfcheck.mitigation`)

`analyze_mitigation(elf)` returns a `Mitigation` with these fields:

- `nx`: false only when the `PT_GNU_STACK` segment is executable; true when
  there is no such segment.
- `pie`: the ELF type is `ET_DYN`.
- `relro`: a `Relro` value, `NONE`, `PARTIAL` or `FULL`. Without a
  `PT_GNU_RELRO` segment it is `NONE`. It is `FULL` when the dynamic section
  requests immediate binding through `DT_BIND_NOW`, `DF_BIND_NOW` in
  `DT_FLAGS` or `DF_1_NOW` in `DT_FLAGS_1`, and `PARTIAL` otherwise.
- `canary`: `__stack_chk_fail` appears in a `SHT_DYNSYM` or `SHT_SYMTAB`
  symbol table.

The individual checks are also available as `check_nx`, `check_pie`,
`check_relro` and `check_canary`.

### Dangerous functions (`elfcheck.vuln`)

`analyze_vulnerability(elf)` scans `.dynsym` (with `.dynstr`) and then
`.symtab` (with `.strtab`) and returns a `VulnReport`. It looks for:

- buffer overflow: `gets`, `strcpy`, `strcat`, `sprintf`, `vsprintf`
- input handling: `scanf`, `fscanf`, `sscanf`
- memory copy: `memcpy`
- raw input: `read`
- network input: `recv`
- command execution: `system`, `popen`

Each finding adds a message such as
`dangerous function found: gets in .dynsym`; at most 32 messages are kept.
`has_gets` and `has_strcpy` are set whenever those functions are found.
The table itself is `DANGER_FUNCS`, and `find_danger_func(name)` looks up
one entry.

## Library use

```python
from elfcheck.elf_parser import parse_elf
from elfcheck.mitigation import analyze_mitigation
from elfcheck.vuln import analyze_vulnerability
from elfcheck.report import format_result, format_vuln

elf = parse_elf("/bin/ls")
print(format_vuln(analyze_vulnerability(elf)), end="")
print(format_result(analyze_mitigation(elf)), end="")
```

`parse_elf` reads a file from disk; `parse_bytes` parses an image already
in memory. Both return an `ElfFile` and raise `ElfError` when the input is
not an ELF file or a header lies outside it. An `ElfFile` offers
`find_section(name)`, `section_name(section)` and `string_at(offset)`.

`print_vuln` and `print_result` in `elfcheck.report` write the same text to
standard output or to a given file.

## Limitations

- Only the 64-bit ELF layout is read; 32-bit files are not supported.
- `has_rwx_segment` is part of the report but no check sets it, so it is
  always 0.
- The scan looks at symbol names only; it does not disassemble code.

## Running the tests

```
pip install .[test]
pytest
```