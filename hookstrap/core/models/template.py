"""
Generated file model — what the emitter writes.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A rendered config artifact, ready to be written.  Never replaces an
    existing file.

    Attributes:
        path:      Relative path from the repository root.
        content:   Full file content.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    reason: str = ""
