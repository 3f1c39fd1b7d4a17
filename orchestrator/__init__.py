"""
Orchestrator Package - Run Coordination Layer.

============================================================
PACKAGE OVERVIEW
============================================================
Coordinates one batch scrape: configuration in, one Pushgateway
push out.

============================================================
ARCHITECTURE
============================================================

    +-----------------------------------------------------+
    |                    ScrapePipeline                   |
    |-----------------------------------------------------|
    |  config         |  File loading and validation     |
    |  settings       |  Flag > env > file resolution    |
    |  GroupProcessor |  Per-group collection + labels   |
    |  ScrapePipeline |  Ordered run, fail-fast, publish |
    |  CLI            |  Command-line interface          |
    +-----------------------------------------------------+

============================================================
RUN STATES
============================================================
NOT_STARTED -> RUNNING -> COMPLETED | ABORTED

============================================================
"""

from .models import RunState, RunResult
from .config import load_config, parse_config, read_config_file
from .settings import RuntimeSettings, resolve_settings
from .group_processor import GroupProcessor
from .pipeline import SamplePublisher, ScrapePipeline


__all__ = [
    # Models
    "RunState",
    "RunResult",

    # Configuration
    "load_config",
    "parse_config",
    "read_config_file",
    "RuntimeSettings",
    "resolve_settings",

    # Execution
    "GroupProcessor",
    "SamplePublisher",
    "ScrapePipeline",
]
