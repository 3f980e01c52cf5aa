"""
Generators — render packaged templates into repository files.
"""

from hookstrap.core.services.generators.precommit import (
    emit_profile,
    render_profile_files,
    runtime_values,
    write_generated_file,
)

__all__ = [
    "emit_profile",
    "render_profile_files",
    "runtime_values",
    "write_generated_file",
]
