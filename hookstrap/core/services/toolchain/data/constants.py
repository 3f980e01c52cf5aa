"""
L0 Data — Platform constants for the toolchain service.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Architecture name normalization (Go-style names, as used by the
# version manager's release assets).
_IARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "AMD64": "amd64",      # Windows / WSL2
    "aarch64": "arm64",
    "arm64": "arm64",      # macOS (Darwin reports arm64)
    "armv7l": "armhf",
    "i686": "i386",
    "i386": "i386",
}

# platform.system() → release asset OS name.  Anything else is unsupported.
_OS_MAP: dict[str, str] = {
    "Linux": "linux",
    "Darwin": "darwin",
}

# Package managers probed in order, with their install command prefix.
_PKG_MANAGERS: list[tuple[str, list[str]]] = [
    ("apt-get", ["apt-get", "install", "-y"]),
    ("dnf", ["dnf", "install", "-y"]),
    ("yum", ["yum", "install", "-y"]),
    ("apk", ["apk", "add", "--no-cache"]),
    ("brew", ["brew", "install"]),
]

# Package managers that install system-wide and therefore need root.
_ROOT_PKG_MANAGERS: frozenset[str] = frozenset({"apt-get", "dnf", "yum", "apk"})
