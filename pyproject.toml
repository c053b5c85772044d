[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "elfcheck"
version = "0.1.0"
description = "Report exploit mitigations and dangerous libc imports in 64-bit ELF binaries"
requires-python = ">=3.10"
dependencies = []
keywords = ["elf", "security", "nx", "pie", "relro", "canary", "binary analysis"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Information Technology",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
elfcheck = "elfcheck.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["elfcheck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
