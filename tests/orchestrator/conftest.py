"""
Shared fixtures for orchestrator tests.
"""

import pytest

from collectors import CollectorRegistry
from core.exceptions import PublishError
from core.models import MetricKind

from .stubs import RecordingPublisher, StubCollector


@pytest.fixture
def project_collector():
    return StubCollector(MetricKind.PROJECT_COUNT, values={"G1": 3, "G2": 7, "G3": 5})


@pytest.fixture
def member_collector():
    return StubCollector(MetricKind.MEMBER_COUNT, values={"G1": 1, "G2": 2, "G3": 9})


@pytest.fixture
def registry(project_collector, member_collector):
    registry = CollectorRegistry()
    registry.register(project_collector)
    registry.register(member_collector)
    return registry


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def failing_publisher():
    return RecordingPublisher(
        error=PublishError("Failed to push metrics to Push Gateway: connection refused")
    )
