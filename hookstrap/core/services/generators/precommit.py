"""
Config emitter — render a profile's templates into the repository.

Create-only: an artifact whose target already exists is reported as
skipped and left byte-for-byte untouched (no diff, no merge).  Each
artifact is handled independently, so a repository that already has
some of the files only gets the missing ones.
"""

from __future__ import annotations

import logging
from pathlib import Path

from hookstrap.core.data import CatalogError, DataRegistry, get_registry
from hookstrap.core.models.action import Receipt
from hookstrap.core.models.profile import ProfileConfig
from hookstrap.core.models.template import GeneratedFile
from hookstrap.core.services.toolchain.detection.environment import detect_python_version

logger = logging.getLogger(__name__)

STEP = "config"


def runtime_values() -> dict[str, str]:
    """Values for the template slots, probed from this machine."""
    return {"python_version": detect_python_version()}


def render_profile_files(
    profile: ProfileConfig,
    values: dict[str, str],
    registry: DataRegistry | None = None,
) -> list[GeneratedFile]:
    """Render every artifact of a profile, in declaration order.

    Raises:
        CatalogError: A template is missing or has an unfilled slot.
    """
    registry = registry or get_registry()
    return [
        GeneratedFile(
            path=artifact.target,
            content=registry.render(artifact.template, values),
            reason=artifact.reason,
        )
        for artifact in profile.artifacts
    ]


def write_generated_file(root: Path, generated: GeneratedFile) -> Receipt:
    """Write one artifact unless it already exists."""
    target = root / generated.path

    if target.exists():
        logger.info("Existing %s found, skipping creation", generated.path)
        return Receipt.skip(STEP, generated.path, reason="already exists")

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
    except OSError as e:
        return Receipt.failure(STEP, generated.path, error=f"Cannot write {target}: {e}")

    logger.info("Created %s", generated.path)
    return Receipt.success(
        STEP,
        generated.path,
        output="created",
        metadata={"path": str(target), "reason": generated.reason},
    )


def emit_profile(
    profile: ProfileConfig,
    root: Path,
    values: dict[str, str] | None = None,
    registry: DataRegistry | None = None,
) -> list[Receipt]:
    """Emit all config artifacts of ``profile`` into ``root``.

    Returns:
        One Receipt per artifact: ok (created), skipped (exists) or
        failed (render or write error).
    """
    if values is None:
        values = runtime_values()

    try:
        files = render_profile_files(profile, values, registry)
    except CatalogError as e:
        return [Receipt.failure(STEP, a.target, error=str(e)) for a in profile.artifacts]

    return [write_generated_file(root, f) for f in files]
