"""
Hook runner invocation — ``pre-commit install`` and per-check runs.

Installation is all-or-nothing for the run: if the hook runner cannot
register its git hooks the bootstrap stops.  Checks are fail-soft:
each named hook id runs on its own against all files, in the profile's
order, and the failures are aggregated afterwards.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import yaml

from hookstrap.core.models.action import Receipt
from hookstrap.core.models.profile import ProfileConfig
from hookstrap.core.observability.logging_config import log_step
from hookstrap.core.services.toolchain.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

CONFIG_FILE = ".pre-commit-config.yaml"


def configured_hook_ids(root: Path) -> set[str] | None:
    """Hook ids declared in the on-disk config, or None if unreadable."""
    path = root / CONFIG_FILE
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Cannot parse %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None

    ids: set[str] = set()
    for repo in data.get("repos") or []:
        if not isinstance(repo, dict):
            continue
        for hook in repo.get("hooks") or []:
            if isinstance(hook, dict) and hook.get("id"):
                ids.add(str(hook["id"]))
    return ids


def install_hooks(profile: ProfileConfig, root: Path, runner: str = "pre-commit") -> list[Receipt]:
    """Register the runner's git hooks for every hook type of the profile."""
    step = "hooks_install"
    if shutil.which(runner) is None:
        return [Receipt.failure(step, runner, error=f"{runner} is not installed or not on PATH")]

    receipts: list[Receipt] = []
    log_step(logger, "Installing %s hooks", runner)
    r = run_command([runner, "install"], cwd=str(root))
    if not r.ok:
        receipts.append(
            Receipt.failure(step, "pre-commit", error=f"{runner} install failed: {r.detail}")
        )
        return receipts
    receipts.append(Receipt.success(step, "pre-commit", output=r.stdout.strip()))

    for hook_type in profile.extra_hook_types:
        r = run_command([runner, "install", "--hook-type", hook_type], cwd=str(root))
        if not r.ok:
            receipts.append(
                Receipt.failure(
                    step,
                    hook_type,
                    error=f"{runner} install --hook-type {hook_type} failed: {r.detail}",
                )
            )
            return receipts
        receipts.append(Receipt.success(step, hook_type, output=r.stdout.strip()))

    return receipts


def run_checks(
    profile: ProfileConfig,
    root: Path,
    runner: str = "pre-commit",
    checks: list[str] | None = None,
) -> list[Receipt]:
    """Run each named check against all files, never stopping early.

    Checks whose id is not in the on-disk config (the user replaced the
    emitted file) are reported as skipped instead of failing.

    Returns:
        One Receipt per check, in execution order.
    """
    step = "hooks_run"
    checks = profile.checks if checks is None else checks
    declared = configured_hook_ids(root)

    receipts: list[Receipt] = []
    for hook_id in checks:
        if declared is not None and hook_id not in declared:
            logger.warning("%s is not in %s, skipping", hook_id, CONFIG_FILE)
            receipts.append(Receipt.skip(step, hook_id, reason=f"not in {CONFIG_FILE}"))
            continue

        log_step(logger, "Running %s", hook_id)
        r = run_command([runner, "run", hook_id, "--all-files"], cwd=str(root), capture=False)
        if r.ok:
            logger.info("%s passed", hook_id)
            receipts.append(Receipt.success(step, hook_id, duration_ms=r.elapsed_ms))
        else:
            logger.error("%s failed", hook_id)
            receipts.append(
                Receipt.failure(
                    step,
                    hook_id,
                    error=r.error or f"exit {r.returncode}",
                    duration_ms=r.elapsed_ms,
                )
            )
    return receipts
