"""Operating system and architecture names used to pick release binaries."""

from __future__ import annotations

import platform as _stdlib_platform
import sys

DARWIN = "darwin"
LINUX = "linux"
WINDOWS = "windows"

AMD64 = "amd64"
ARM64 = "arm64"

BINARY_PREFIX = "educates-"

_SUPPORTED: dict[str, frozenset[str]] = {
    DARWIN: frozenset({AMD64, ARM64}),
    LINUX: frozenset({AMD64, ARM64}),
}

_MACHINE_ALIASES = {
    "x86_64": AMD64,
    "amd64": AMD64,
    "x64": AMD64,
    "arm64": ARM64,
    "aarch64": ARM64,
    "armv8": ARM64,
    "armv8l": ARM64,
}


def platform_binary_name(os_name: str, arch: str) -> str:
    """Return the release asset name for an OS and architecture."""
    return f"{BINARY_PREFIX}{os_name}-{arch}"


def is_supported_platform(os_name: str, arch: str) -> bool:
    """Tell whether binaries are published for this OS and architecture."""
    return arch in _SUPPORTED.get(os_name, frozenset())


def current_platform() -> tuple[str, str]:
    """Return the running (os, arch) pair using release naming."""
    system = sys.platform
    if system == "darwin":
        os_name = DARWIN
    elif system.startswith("linux"):
        os_name = LINUX
    elif system in ("win32", "cygwin", "msys"):
        os_name = WINDOWS
    else:
        os_name = system

    machine = _stdlib_platform.machine().lower()
    arch = _MACHINE_ALIASES.get(machine, machine)
    return os_name, arch