"""
Orchestrator - Scrape Pipeline.

============================================================
RESPONSIBILITY
============================================================
Drives one complete scrape run.

- Process groups in configuration order
- Accumulate samples into a single batch
- Short-circuit on the first failure
- Publish the batch exactly once, only when every group succeeded

============================================================
FAILURE POLICY
============================================================
All-or-nothing: any collector failure aborts the run. Remaining
groups are not attempted and nothing is published. A failed push
likewise aborts the run and the batch is discarded.

The pipeline never exits the process; the caller decides what an
ABORTED result means.

============================================================
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Sequence

from core.exceptions import GitLabStatsError, PipelineError, PublishError
from core.models import MetricSample, ScrapeConfig

from .group_processor import GroupProcessor
from .models import RunResult, RunState


# ============================================================
# HELPERS
# ============================================================

def format_sample(sample: MetricSample) -> str:
    """Render a sample as one exposition line, e.g. name{k="v"} 3."""
    labels = ",".join(
        f'{key}="{_escape_label_value(value)}"' for key, value in sorted(sample.labels.items())
    )
    if labels:
        return f"{sample.name}{{{labels}}} {sample.value}"
    return f"{sample.name} {sample.value}"


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


# ============================================================
# PUBLISHER PROTOCOL
# ============================================================

class SamplePublisher(Protocol):
    """Anything that can push a finished batch."""

    async def publish(self, samples: Sequence[MetricSample]) -> None:
        """Push the batch; raise PublishError on failure."""
        ...


# ============================================================
# SCRAPE PIPELINE
# ============================================================

class ScrapePipeline:
    """
    Runs collection for all configured groups, then publishes.

    Usage:
        pipeline = ScrapePipeline(config, GroupProcessor(registry, config.default_labels), publisher)
        result = await pipeline.run()
    """

    def __init__(
        self,
        config: ScrapeConfig,
        processor: GroupProcessor,
        publisher: Optional[SamplePublisher] = None,
        dry_run: bool = False,
    ):
        """
        Initialize pipeline.

        Args:
            config: Immutable scrape configuration
            processor: Group processor bound to a collector registry
            publisher: Batch publisher (optional only for dry runs)
            dry_run: Collect without publishing
        """
        if publisher is None and not dry_run:
            raise ValueError("publisher is required unless dry_run is set")

        self._config = config
        self._processor = processor
        self._publisher = publisher
        self._dry_run = dry_run
        self._state = RunState.NOT_STARTED
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> RunState:
        """Current run state."""
        return self._state

    def _generate_run_id(self) -> str:
        """Generate a unique run ID."""
        return f"run_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"

    async def run(self) -> RunResult:
        """
        Execute the run.

        Returns:
            RunResult with state COMPLETED or ABORTED

        Raises:
            PipelineError: If the pipeline has already run
        """
        if self._state != RunState.NOT_STARTED:
            raise PipelineError(f"Pipeline already {self._state.value}; create a new one per run")

        run_id = self._generate_run_id()
        self._state = RunState.RUNNING

        result = RunResult(
            run_id=run_id,
            started_at=datetime.now(timezone.utc),
            dry_run=self._dry_run,
        )

        self._logger.info(
            f"=== RUN START: {run_id} | groups={len(self._config.groups)} | "
            f"dry_run={self._dry_run} ==="
        )

        batch: List[MetricSample] = []

        for group in self._config.groups:
            try:
                samples = await self._processor.process(group)
            except GitLabStatsError as e:
                result.failed_group = group.id
                return self._abort(result, e)
            except Exception as e:
                self._logger.error(
                    f"Unexpected error processing group {group.id}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                result.failed_group = group.id
                return self._abort(result, e)

            batch.extend(samples)
            result.groups_processed += 1

        result.samples = batch

        if self._dry_run:
            for sample in batch:
                self._logger.info(f"[dry-run] {format_sample(sample)}")
        else:
            try:
                await self._publisher.publish(batch)
            except PublishError as e:
                return self._abort(result, e)
            except Exception as e:
                self._logger.error(
                    f"Unexpected error publishing batch: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                return self._abort(result, e)
            result.published = True

        result.completed_at = datetime.now(timezone.utc)
        result.state = RunState.COMPLETED
        self._state = RunState.COMPLETED

        self._logger.info(
            f"=== RUN COMPLETE: {run_id} | duration={result.duration_seconds:.2f}s | "
            f"groups={result.groups_processed} | samples={len(batch)} | "
            f"published={result.published} ==="
        )

        return result

    def _abort(self, result: RunResult, error: Exception) -> RunResult:
        """Mark the run aborted and drop everything collected."""
        result.completed_at = datetime.now(timezone.utc)
        result.state = RunState.ABORTED
        result.samples = []
        result.published = False
        result.error = error.message if isinstance(error, GitLabStatsError) else str(error)
        result.error_type = type(error).__name__
        self._state = RunState.ABORTED

        detail = error.to_log_format() if isinstance(error, GitLabStatsError) else str(error)
        self._logger.error(
            f"=== RUN ABORTED: {result.run_id} | "
            f"failed_group={result.failed_group} | {detail} ==="
        )

        return result


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "format_sample",
    "SamplePublisher",
    "ScrapePipeline",
]
