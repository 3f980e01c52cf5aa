"""
Receipt model — the step result contract.

Every service that touches the outside world (subprocesses, the
filesystem, the network) reports back with a Receipt.  Services
NEVER raise for expected failures.  The failure is captured here and
the orchestrator decides whether it is terminal.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of one unit of work inside a bootstrap step.

    ``step`` names the pipeline stage (``dependencies``, ``tools``,
    ``config``, ``hooks_run``, …) and ``target`` the thing acted on
    (a tool name, an artifact filename, a hook id).
    """

    step: str
    target: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the unit succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the unit failed."""
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def success(
        cls,
        step: str,
        target: str,
        output: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a success receipt."""
        return cls(step=step, target=target, status="ok", output=output, **kwargs)

    @classmethod
    def failure(
        cls,
        step: str,
        target: str,
        error: str,
        **kwargs: Any,
    ) -> Receipt:
        """Create a failure receipt."""
        return cls(step=step, target=target, status="failed", error=error, **kwargs)

    @classmethod
    def skip(
        cls,
        step: str,
        target: str,
        reason: str = "",
        **kwargs: Any,
    ) -> Receipt:
        """Create a skip receipt."""
        return cls(step=step, target=target, status="skipped", output=reason, **kwargs)
