"""
Publishing - Pushgateway Publisher.

============================================================
RESPONSIBILITY
============================================================
Transmits one run's metric samples to the Prometheus Pushgateway
as a single atomic batch.

- One gauge family per metric name
- Each sample keeps its own constant label set
- One PUT per run, replacing the job's metric group
- No buffering, no retry: a failed push loses the batch

============================================================
"""

import asyncio
import logging
from collections import OrderedDict
from http.client import HTTPException
from typing import Dict, Iterable, Iterator, List, Sequence

from prometheus_client import CollectorRegistry, generate_latest, push_to_gateway
from prometheus_client.metrics_core import Metric

from core.constants import DEFAULT_TIMEOUT_SECONDS, PUSHGATEWAY_JOB
from core.exceptions import PublishError
from core.models import MetricSample


logger = logging.getLogger(__name__)


# ============================================================
# BATCH COLLECTOR
# ============================================================

class SampleBatchCollector:
    """
    prometheus_client custom collector over a fixed sample batch.

    Samples are grouped into one gauge family per metric name, in
    first-seen order.
    """

    def __init__(self, samples: Sequence[MetricSample]):
        self._samples = list(samples)

    def collect(self) -> Iterator[Metric]:
        families: Dict[str, Metric] = OrderedDict()

        for sample in self._samples:
            family = families.get(sample.name)
            if family is None:
                family = Metric(sample.name, sample.help_text, "gauge")
                families[sample.name] = family
            family.add_sample(sample.name, dict(sample.labels), float(sample.value))

        yield from families.values()


def build_registry(samples: Iterable[MetricSample]) -> CollectorRegistry:
    """Build a dedicated registry holding only the given samples."""
    registry = CollectorRegistry()
    registry.register(SampleBatchCollector(list(samples)))
    return registry


# ============================================================
# PUBLISHER
# ============================================================

class PushgatewayPublisher:
    """
    Pushes sample batches to a Pushgateway.

    Usage:
        publisher = PushgatewayPublisher("http://pushgateway:9091")
        await publisher.publish(samples)
    """

    def __init__(
        self,
        gateway_url: str,
        job: str = PUSHGATEWAY_JOB,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize publisher.

        Args:
            gateway_url: Pushgateway base URL (scheme optional)
            job: Job name the batch is grouped under
            timeout: Push timeout in seconds
        """
        if not gateway_url:
            raise ValueError("gateway_url is required")

        self._gateway_url = gateway_url
        self._job = job
        self._timeout = timeout
        self._push_count = 0

    @property
    def gateway_url(self) -> str:
        """Target gateway URL."""
        return self._gateway_url

    @property
    def job(self) -> str:
        """Job name."""
        return self._job

    @property
    def push_count(self) -> int:
        """Number of successful pushes."""
        return self._push_count

    def render(self, samples: Sequence[MetricSample]) -> bytes:
        """Render a batch in the Prometheus text exposition format."""
        return generate_latest(build_registry(samples))

    async def publish(self, samples: Sequence[MetricSample]) -> None:
        """
        Push the batch as one unit.

        Raises:
            PublishError: If the gateway push failed
        """
        batch: List[MetricSample] = list(samples)
        if not batch:
            logger.warning(
                f"Pushing empty batch for job '{self._job}'; "
                f"previous metrics of this job will be cleared"
            )

        registry = build_registry(batch)

        try:
            await asyncio.to_thread(self._push, registry)
        except (OSError, ValueError, HTTPException) as e:
            raise PublishError(
                message=f"Failed to push metrics to Push Gateway: {e}",
                gateway_url=self._gateway_url,
                job=self._job,
                cause=e,
            ) from e

        self._push_count += 1
        logger.info(
            f"Pushed {len(batch)} samples to {self._gateway_url} (job={self._job})"
        )

    def _push(self, registry: CollectorRegistry) -> None:
        push_to_gateway(
            self._gateway_url,
            job=self._job,
            registry=registry,
            timeout=self._timeout,
        )
