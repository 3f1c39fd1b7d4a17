"""
Publishing Package.

Delivers collected metric samples to the Prometheus Pushgateway.
"""

from .publisher import (
    PushgatewayPublisher,
    SampleBatchCollector,
    build_registry,
)


__all__ = [
    "PushgatewayPublisher",
    "SampleBatchCollector",
    "build_registry",
]
