"""
hookstrap — idempotent pre-commit configuration and toolchain bootstrap.
"""

__version__ = "0.1.0"
