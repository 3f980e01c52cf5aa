"""
L0 Data — re-exports of the toolchain constants.
"""

from hookstrap.core.services.toolchain.data.constants import (
    _IARCH_MAP,
    _OS_MAP,
    _PKG_MANAGERS,
    _ROOT_PKG_MANAGERS,
)

__all__ = [
    "_IARCH_MAP",
    "_OS_MAP",
    "_PKG_MANAGERS",
    "_ROOT_PKG_MANAGERS",
]
