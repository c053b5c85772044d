"""Exploit-mitigation and dangerous-function checks for 64-bit ELF binaries."""

__version__ = "0.1.0"
__all__ = ["elf_parser", "mitigation", "vuln", "report", "cli"]