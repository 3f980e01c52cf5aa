"""
Step pipeline — run named bootstrap steps in order and collect receipts.

Each step returns a list of Receipts.  A step marked ``halt_on_failure``
stops the pipeline as soon as one of its receipts fails; other steps
just record their failures and the pipeline moves on.

Flow:
    step → receipts → (halt?) → next step → … → PipelineReport
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from hookstrap.core.models.action import Receipt
from hookstrap.core.observability.logging_config import log_step

logger = logging.getLogger(__name__)


@dataclass
class Step:
    """One named stage of a run."""

    name: str
    run: Callable[[], list[Receipt]]
    halt_on_failure: bool = True
    description: str = ""


@dataclass
class PipelineReport:
    """Result of running a pipeline."""

    operation_id: str = ""
    receipts: list[Receipt] = field(default_factory=list)
    step_receipts: dict[str, list[Receipt]] = field(default_factory=dict)
    halted_at: str | None = None

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.skipped)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0 and self.halted_at is None

    @property
    def status(self) -> str:
        if self.all_ok:
            return "ok"
        if self.halted_at is None and self.succeeded > 0:
            return "partial"
        return "failed"

    def failures(self, step: str | None = None) -> list[Receipt]:
        """Failed receipts, optionally for one step only."""
        source = self.step_receipts.get(step, []) if step else self.receipts
        return [r for r in source if r.failed]

    def to_dict(self) -> dict:
        return {
            "operation_id": self.operation_id,
            "status": self.status,
            "halted_at": self.halted_at,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


def _run_step(step: Step) -> list[Receipt]:
    """Run one step, turning an unexpected exception into a failed receipt."""
    start = time.monotonic()
    try:
        receipts = step.run()
    except Exception as e:  # noqa: BLE001
        logger.exception("Step %s raised", step.name)
        receipts = [Receipt.failure(step.name, step.name, error=f"{type(e).__name__}: {e}")]
    elapsed = int((time.monotonic() - start) * 1000)
    logger.debug("Step %s finished in %dms", step.name, elapsed)
    return receipts


def run_pipeline(steps: list[Step], operation_id: str = "") -> PipelineReport:
    """Run ``steps`` sequentially.

    Args:
        steps: Steps in execution order.
        operation_id: Identifier recorded on the report.

    Returns:
        PipelineReport with every receipt, grouped by step.
    """
    report = PipelineReport(operation_id=operation_id or generate_operation_id())

    for step in steps:
        log_step(logger, step.description or step.name)
        receipts = _run_step(step)
        report.receipts.extend(receipts)
        report.step_receipts[step.name] = receipts

        for receipt in receipts:
            status_marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
            logger.debug("%s %s:%s → %s", status_marker, step.name, receipt.target, receipt.status)

        if step.halt_on_failure and any(r.failed for r in receipts):
            report.halted_at = step.name
            logger.error("Stopping: step '%s' failed", step.name)
            break

    return report


def generate_operation_id() -> str:
    """Generate a unique operation ID."""
    now = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    short = uuid.uuid4().hex[:6]
    return f"op-{now}-{short}"
