"""
Stub collaborators for orchestrator tests.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from collectors import BaseCollector
from core.models import MetricKind, MetricSample
from gitlab_api import GitLabNotFoundError


# ============================================================
# STUB COLLECTORS
# ============================================================

class StubCollector(BaseCollector):
    """
    Collector returning canned per-group values.
    
    A group listed in ``fail_for`` raises a GitLab 404 error, which
    run() converts to RetrievalError.
    """
    
    def __init__(
        self,
        kind: MetricKind,
        values: Optional[Dict[str, int]] = None,
        fail_for: Sequence[str] = (),
    ):
        super().__init__()
        self.kind = kind
        self.values = values or {}
        self.fail_for = set(fail_for)
        self.calls: List[Tuple[str, object]] = []
    
    async def collect(self, group_id, spec):
        self.calls.append((group_id, spec))
        if group_id in self.fail_for:
            raise GitLabNotFoundError("HTTP 404: 404 Group Not Found", status_code=404)
        return self.values.get(group_id, 0)


class RecordingPublisher:
    """Publisher that records batches instead of pushing them."""
    
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.batches: List[List[MetricSample]] = []
    
    async def publish(self, samples):
        self.batches.append(list(samples))
        if self.error:
            raise self.error


