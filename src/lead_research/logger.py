"""
Logger Configuration Module

Handles logging setup for research operations.
"""

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from strands.telemetry import StrandsTelemetry

# Load environment variables from .env file
load_dotenv()

_telemetry: StrandsTelemetry | None = None


def _setup_telemetry() -> None:
    global _telemetry
    if _telemetry is None:
        _telemetry = StrandsTelemetry()
        if "OTEL_EXPORTER_OTLP_ENDPOINT" in os.environ:
            _telemetry.setup_otlp_exporter()


def create_logger(log_dir: str = "logs", console: bool = False) -> logging.Logger:
    """
    Configure the strands and research loggers.

    Args:
        log_dir: Directory receiving the log files
        console: Also echo research log lines to stderr

    Returns:
        The research logger
    """
    _setup_telemetry()

    Path(log_dir).mkdir(parents=True, exist_ok=True)

    # Configure strands logger to write to file
    strands_logger = logging.getLogger("strands")
    strands_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(
        Path(log_dir) / "strands_agents.log", encoding="utf-8"
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )
    strands_logger.addHandler(file_handler)

    # Research progress and results
    research_handler = logging.FileHandler(
        Path(log_dir) / "research_results.log", encoding="utf-8"
    )
    research_handler.setFormatter(logging.Formatter("%(asctime)s | %(message)s"))

    research_logger = logging.getLogger("research")
    research_logger.setLevel(logging.INFO)
    research_logger.addHandler(research_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        research_logger.addHandler(console_handler)

    return research_logger


research_logger: logging.Logger | None = None


def setup_logging(log_dir: str | None = None, console: bool = False) -> logging.Logger:
    global research_logger
    if research_logger is None:
        if log_dir is None:
            from .settings import get_settings

            log_dir = get_settings().log_dir
        research_logger = create_logger(log_dir, console)
    return research_logger
