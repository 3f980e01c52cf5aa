"""
Commit-message linting with commitlint (Conventional Commits).

``ensure_commitlint`` is the single availability step used by every
profile that installs a ``commit-msg`` hook; a failure there is only a
warning.  ``lint_message`` backs ``hookstrap commit-msg``.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from hookstrap.core.data import get_registry
from hookstrap.core.models.action import Receipt
from hookstrap.core.models.settings import CommitlintSettings
from hookstrap.core.models.template import GeneratedFile
from hookstrap.core.services.generators.precommit import write_generated_file
from hookstrap.core.services.toolchain.execution.subprocess_runner import run_command

logger = logging.getLogger(__name__)

STEP = "commitlint"
COMMITLINT_CONFIG = "commitlint.config.js"
_CONFIG_TEMPLATE = "golang/commitlint.config.js"

CONVENTIONAL_TYPES: list[tuple[str, str]] = [
    ("feat", "A new feature"),
    ("fix", "A bug fix"),
    ("docs", "Documentation only changes"),
    ("style", "Changes that do not affect code meaning"),
    ("refactor", "Code change that neither fixes a bug nor adds a feature"),
    ("perf", "Code change that improves performance"),
    ("test", "Adding or correcting tests"),
    ("build", "Changes to the build system or external dependencies"),
    ("ci", "CI configuration or scripts"),
    ("chore", "Other changes that don't modify src or test files"),
    ("revert", "Reverts a previous commit"),
]

EXAMPLES = [
    "feat(auth): add password reset functionality",
    "fix(api): handle null server response",
    "docs(readme): update installation instructions",
]


@dataclass
class LintResult:
    ok: bool
    output: str = ""
    error: str | None = None
    config_created: bool = False


def ensure_commitlint(settings: CommitlintSettings) -> Receipt:
    """Make sure the ``commitlint`` CLI is on PATH, installing it with npm."""
    if shutil.which("commitlint"):
        return Receipt.skip(STEP, "commitlint", reason="already installed")
    if not settings.auto_install:
        return Receipt.skip(STEP, "commitlint", reason="auto-install disabled")
    if shutil.which("npm") is None:
        return Receipt.skip(STEP, "commitlint", reason="npm not available")

    logger.info("Installing commitlint globally...")
    r = run_command(["npm", "install", "-g", *settings.packages])
    if not r.ok:
        return Receipt.failure(STEP, "commitlint", error=f"npm install failed: {r.detail}")
    return Receipt.success(STEP, "commitlint", output="installed via npm")


def repo_toplevel(start: Path | None = None) -> Path | None:
    r = run_command(["git", "rev-parse", "--show-toplevel"], cwd=str(start) if start else None)
    if not r.ok or not r.stdout.strip():
        return None
    return Path(r.stdout.strip())


def ensure_config(root: Path) -> Receipt:
    """Create ``commitlint.config.js`` at the repository root if missing."""
    content = get_registry().render(_CONFIG_TEMPLATE, {})
    return write_generated_file(
        root,
        GeneratedFile(path=COMMITLINT_CONFIG, content=content, reason="commitlint rules"),
    )


def lint_message(message_file: Path, settings: CommitlintSettings) -> LintResult:
    """Lint the commit message stored in ``message_file``."""
    root = repo_toplevel(message_file.parent) or Path.cwd()
    config = ensure_config(root)
    if config.failed:
        return LintResult(ok=False, error=config.error)

    availability = ensure_commitlint(settings)
    if shutil.which("commitlint") is None:
        return LintResult(
            ok=False,
            error=availability.error or "commitlint is not installed and could not be installed",
            config_created=config.ok,
        )

    try:
        message = message_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return LintResult(ok=False, error=f"Cannot read {message_file}: {e}")

    r = run_command(["commitlint"], input_text=message, cwd=str(root))
    output = "\n".join(p for p in (r.stdout.strip(), r.stderr.strip()) if p)
    return LintResult(ok=r.ok, output=output, config_created=config.ok)


def conventional_guide() -> str:
    """Help text shown when a message fails the check."""
    width = max(len(t) for t, _ in CONVENTIONAL_TYPES)
    lines = [
        "Commit message must follow the Conventional Commit format:",
        "",
        "    type(scope): subject",
        "",
        "Types:",
    ]
    lines += [f"    {t.ljust(width)} : {desc}" for t, desc in CONVENTIONAL_TYPES]
    lines += ["", "Examples:"]
    lines += [f"    {ex}" for ex in EXAMPLES]
    return "\n".join(lines)
