"""
Orchestrator - Models.

============================================================
RESPONSIBILITY
============================================================
Defines data models for one scrape run.

- Run lifecycle states
- Run result with timing, samples and failure details

============================================================
"""

from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.models import MetricSample


# ============================================================
# RUN STATE
# ============================================================

class RunState(Enum):
    """
    Run lifecycle states.

    NOT_STARTED -> RUNNING -> COMPLETED | ABORTED
    """

    NOT_STARTED = "not_started"
    """Pipeline built, run() not yet called."""

    RUNNING = "running"
    """Groups are being collected or the batch is being pushed."""

    COMPLETED = "completed"
    """Every enabled collector succeeded and the push succeeded."""

    ABORTED = "aborted"
    """A collector or the push failed; nothing more was attempted."""

    @property
    def is_terminal(self) -> bool:
        """Check if state is final."""
        return self in (RunState.COMPLETED, RunState.ABORTED)


# ============================================================
# RUN RESULT
# ============================================================

@dataclass
class RunResult:
    """Result of a complete scrape run."""

    run_id: str
    started_at: datetime
    state: RunState = RunState.RUNNING
    completed_at: Optional[datetime] = None
    samples: List[MetricSample] = field(default_factory=list)
    groups_processed: int = 0
    published: bool = False
    dry_run: bool = False
    failed_group: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def success(self) -> bool:
        """Check if the run completed."""
        return self.state == RunState.COMPLETED

    @property
    def duration_seconds(self) -> float:
        """Get total duration in seconds."""
        if self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "run_id": self.run_id,
            "state": self.state.value,
            "success": self.success,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
            "groups_processed": self.groups_processed,
            "sample_count": len(self.samples),
            "published": self.published,
            "dry_run": self.dry_run,
            "failed_group": self.failed_group,
            "error": self.error,
            "error_type": self.error_type,
        }


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "RunState",
    "RunResult",
]
