"""
Git template registration — default hooks for future repositories.

Copies the packaged hook scripts into ``<template_dir>/hooks`` and points
``init.templateDir`` at the directory.  Only ``git init`` / ``git clone``
pick the scripts up; existing repositories are never touched.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from hookstrap.core.data import TEMPLATE_DIR
from hookstrap.core.models.action import Receipt
from hookstrap.core.services.toolchain.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

STEP = "git_templates"
HOOK_SCRIPTS = ("pre-commit", "commit-msg")
_SOURCE_DIR = TEMPLATE_DIR / "git-hooks"


def install_hook_script(source: Path, dest: Path) -> Receipt:
    """Copy one script and make it executable.  Unchanged files are skipped."""
    if dest.is_file() and dest.read_bytes() == source.read_bytes():
        dest.chmod(0o755)
        return Receipt.skip(STEP, dest.name, reason="up to date")
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, dest)
        dest.chmod(0o755)
    except OSError as e:
        return Receipt.failure(STEP, dest.name, error=f"Cannot install {dest}: {e}")
    logger.info("Installed template hook %s", dest)
    return Receipt.success(STEP, dest.name, output=str(dest))


def register_git_templates(template_dir: Path) -> list[Receipt]:
    """Install the hook scripts and register ``template_dir`` with git."""
    hooks_dir = template_dir / "hooks"
    receipts = [install_hook_script(_SOURCE_DIR / name, hooks_dir / name) for name in HOOK_SCRIPTS]
    if any(r.failed for r in receipts):
        return receipts

    r = run_command(["git", "config", "--global", "init.templateDir", str(template_dir)])
    if not r.ok:
        receipts.append(
            Receipt.failure(STEP, "init.templateDir", error=f"git config failed: {r.detail}")
        )
    else:
        logger.info("git init.templateDir → %s", template_dir)
        receipts.append(Receipt.success(STEP, "init.templateDir", output=str(template_dir)))
    return receipts
