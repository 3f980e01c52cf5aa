"""
L4 Execution — Core subprocess runner.

Every install, clone and hook command goes through ``run_command``;
only the read-only detection probes call ``subprocess`` directly.
Logging and error handling are centralised here, and the runner never
raises: every outcome is a CommandResult.

No timeout is applied unless the caller passes one.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Output kept on a result, from the end of the stream
_TAIL = 4000


@dataclass
class CommandResult:
    """Outcome of one subprocess invocation."""

    cmd: list[str]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    @property
    def detail(self) -> str:
        """Best human-readable failure detail (stderr, then stdout, then error)."""
        return (self.stderr or self.stdout or self.error or "").strip()


def run_command(
    cmd: list[str],
    *,
    capture: bool = True,
    input_text: str | None = None,
    needs_sudo: bool = False,
    cwd: str | None = None,
    timeout: int | None = None,
) -> CommandResult:
    """Run a command and report how it went.

    Args:
        cmd: Command list for ``subprocess.run()``.
        capture: Capture stdout/stderr.  ``False`` lets the child write
            straight to the terminal (hook runs, interactive sudo).
        input_text: Text piped to stdin.
        needs_sudo: Prefix with ``sudo`` unless already root.
        cwd: Working directory for the command.
        timeout: Seconds before giving up (None = wait forever).

    Returns:
        CommandResult.  ``error`` is set when the command could not be
        started or a non-zero exit code was returned.
    """
    # ── Sudo handling ──
    if needs_sudo and hasattr(os, "geteuid") and os.geteuid() != 0:
        if shutil.which("sudo") is None:
            return CommandResult(
                cmd=cmd,
                returncode=1,
                error="This step requires root and sudo is not available.",
            )
        cmd = ["sudo", *cmd]

    # ── Execute ──
    logger.debug("Running: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            input=input_text,
            cwd=cwd,
            timeout=timeout,
        )
    except FileNotFoundError:
        return CommandResult(cmd=cmd, returncode=127, error=f"Command not found: {cmd[0]}")
    except subprocess.TimeoutExpired:
        return CommandResult(cmd=cmd, returncode=124, error=f"Command timed out ({timeout}s)")
    except OSError as e:
        logger.exception("Subprocess error: %s", cmd)
        return CommandResult(cmd=cmd, returncode=1, error=str(e))

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = proc.stdout[-_TAIL:] if proc.stdout else ""
    stderr = proc.stderr[-_TAIL:] if proc.stderr else ""

    if proc.returncode == 0:
        return CommandResult(cmd=cmd, stdout=stdout, stderr=stderr, elapsed_ms=elapsed_ms)

    logger.debug("Command exited %d: %s", proc.returncode, " ".join(cmd))
    return CommandResult(
        cmd=cmd,
        returncode=proc.returncode,
        stdout=stdout,
        stderr=stderr,
        elapsed_ms=elapsed_ms,
        error=f"Command failed (exit {proc.returncode})",
    )
