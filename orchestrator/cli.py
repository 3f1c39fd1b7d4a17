"""
Orchestrator - CLI.

============================================================
RESPONSIBILITY
============================================================
Command-line interface for the scraper.

- Provides argparse-based CLI with a `scrape` subcommand
- Loads configuration from CLI, environment and config file
- Configures logging
- The ONLY place that turns failures into exit codes

============================================================
USAGE
============================================================
python -m orchestrator.cli scrape --config config.yaml
python -m orchestrator.cli scrape -c config.json -t <token> -p http://localhost:9091
python -m orchestrator.cli scrape -c config.yaml --dry-run --log-level DEBUG

============================================================
EXIT CODES
============================================================
0   - all enabled collectors succeeded and the push succeeded
1   - config, credential, collection or push failure
2   - invalid command-line usage
130 - interrupted

============================================================
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from dotenv import load_dotenv

from collectors import create_default_registry
from core.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    ENV_ACCESS_TOKEN,
    ENV_GITLAB_URL,
    ENV_PUSHGATEWAY_URL,
    SYSTEM_NAME,
    SYSTEM_VERSION,
)
from core.exceptions import ConfigurationError
from core.models import ScrapeConfig
from gitlab_api import GitLabClient
from publishing import PushgatewayPublisher

from .config import parse_config, read_config_file
from .group_processor import GroupProcessor
from .models import RunResult
from .pipeline import ScrapePipeline
from .settings import RuntimeSettings, resolve_settings


logger = logging.getLogger(__name__)


# ============================================================
# LOGGING
# ============================================================

class JsonLogFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure root logging."""
    handler = logging.StreamHandler(sys.stderr)

    if fmt == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
        force=True,
    )


# ============================================================
# CLI ARGUMENT PARSER
# ============================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog=SYSTEM_NAME,
        description="Collect GitLab group statistics and push them to a Prometheus Pushgateway",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Environment:
  {ENV_ACCESS_TOKEN:22s} GitLab access token (used when --token is absent)
  {ENV_PUSHGATEWAY_URL:22s} Pushgateway URL (used when --pushgateway is absent)
  {ENV_GITLAB_URL:22s} GitLab base URL (used when --gitlab-url is absent)

Examples:
  %(prog)s scrape -c config.yaml
  %(prog)s scrape -c config.json -p http://localhost:9091
  %(prog)s scrape -c config.yaml --dry-run
        """
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"%(prog)s {SYSTEM_VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    scrape = subparsers.add_parser(
        "scrape",
        help="Scrape statistics from GitLab",
        description="Scrape statistics from GitLab based on the provided configuration file.",
    )

    # --------------------------------------------------------
    # Scrape Options
    # --------------------------------------------------------
    scrape.add_argument(
        "--config", "-c",
        required=True,
        metavar="PATH",
        help="Config file (.json, .yaml or .yml)",
    )

    scrape.add_argument(
        "--token", "-t",
        metavar="TOKEN",
        help=f"GitLab access token (optional, can also be set via {ENV_ACCESS_TOKEN} environment variable)",
    )

    scrape.add_argument(
        "--pushgateway", "-p",
        metavar="URL",
        help=f"Prometheus Push Gateway URL (optional, can also be set via {ENV_PUSHGATEWAY_URL} environment variable)",
    )

    scrape.add_argument(
        "--gitlab-url",
        metavar="URL",
        help=f"GitLab instance URL (optional, can also be set via {ENV_GITLAB_URL}; default: https://gitlab.com)",
    )

    scrape.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_SECONDS,
        metavar="SECONDS",
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS:g})",
    )

    scrape.add_argument(
        "--dry-run",
        action="store_true",
        help="Collect and log samples without pushing them",
    )

    # --------------------------------------------------------
    # Logging Options
    # --------------------------------------------------------
    logging_group = scrape.add_argument_group("Logging Options")

    logging_group.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    logging_group.add_argument(
        "--log-format",
        type=str,
        choices=["json", "text"],
        default="text",
        help="Logging format (default: text)",
    )

    return parser


# ============================================================
# RUN
# ============================================================

async def run_scrape(config: ScrapeConfig, settings: RuntimeSettings) -> RunResult:
    """
    Wire the client, collectors and publisher, then run the pipeline.

    Args:
        config: Scrape configuration
        settings: Resolved runtime settings

    Returns:
        RunResult
    """
    async with GitLabClient(
        settings.access_token,
        base_url=settings.gitlab_url,
        timeout=settings.timeout_seconds,
    ) as client:
        registry = create_default_registry(client)
        processor = GroupProcessor(registry, config.default_labels)

        publisher = None
        if not settings.dry_run:
            publisher = PushgatewayPublisher(
                settings.pushgateway_url,
                job=settings.job,
                timeout=settings.timeout_seconds,
            )

        pipeline = ScrapePipeline(
            config,
            processor,
            publisher=publisher,
            dry_run=settings.dry_run,
        )
        return await pipeline.run()


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def scrape_command(args: argparse.Namespace) -> int:
    """
    Execute the scrape subcommand.

    Returns:
        Exit code
    """
    try:
        raw_config = read_config_file(args.config)
    except ConfigurationError as e:
        return _fail(e.message)

    try:
        settings = resolve_settings(
            raw_config,
            token=args.token,
            pushgateway_url=args.pushgateway,
            gitlab_url=args.gitlab_url,
            timeout_seconds=args.timeout,
            dry_run=args.dry_run,
        )
    except ConfigurationError as e:
        return _fail(e.message)

    try:
        config = parse_config(raw_config)
    except ConfigurationError as e:
        return _fail(f"Failed to unmarshal config: {e.message}")

    logger.debug(f"Resolved settings: {settings!r}")

    result = asyncio.run(run_scrape(config, settings))

    if not result.success:
        return _fail(f"Scrape failed: {result.error}")

    return 0


# ============================================================
# MAIN ENTRY POINT
# ============================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, args.log_format)
    load_dotenv()

    try:
        if args.command == "scrape":
            return scrape_command(args)
        parser.error(f"Unknown command: {args.command}")
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 130

    return 2


# ============================================================
# MODULE EXECUTION
# ============================================================

if __name__ == "__main__":
    sys.exit(main())
