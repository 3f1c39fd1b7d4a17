#!/usr/bin/env python3
"""
GitLab Group Statistics - Main Application Entry Point.

============================================================
SINGLE ENTRYPOINT
============================================================
One batch invocation: read configuration, collect group
statistics from GitLab, push them to the Prometheus Pushgateway,
exit. Schedule it externally (cron, CI pipeline schedule,
Kubernetes CronJob).

============================================================
USAGE
============================================================
Direct execution:
    python app.py scrape --config config.yaml

Environment-based credentials:
    GITLAB_ACCESS_TOKEN=... PUSHGATEWAY_URL=http://localhost:9091 \
        python app.py scrape -c config.yaml

============================================================
"""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.absolute()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from orchestrator.cli import main


if __name__ == "__main__":
    sys.exit(main())
