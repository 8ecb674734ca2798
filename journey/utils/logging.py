"""
Structured logging for Architecture Journey.

- Configurable level (DEBUG, INFO, WARNING, ERROR)
- Writes to the logs/ directory (file handler) and to the console
- Helpers for recommendation runs and tree validation results
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Default: project root / logs
LOG_DIR = Path(os.getenv("JOURNEY_LOG_DIR", str(Path(__file__).resolve().parent.parent.parent / "logs")))
LOG_LEVEL = os.getenv("JOURNEY_LOG_LEVEL", "INFO").upper()


def configure_logging(
    level: str = LOG_LEVEL,
    log_dir: Optional[Path] = None,
    log_to_console: bool = True,
) -> None:
    """Configure root and journey loggers. Call once at process start."""
    log_dir = Path(log_dir) if log_dir else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    level_value = getattr(logging, level.upper(), logging.INFO)

    file_handler = logging.FileHandler(log_dir / "journey.log", encoding="utf-8")
    file_handler.setLevel(level_value)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    root = logging.getLogger()
    root.setLevel(level_value)
    # Avoid duplicate handlers when configured twice
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(file_handler)
    if log_to_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level_value)
        console.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        root.addHandler(console)

    logging.getLogger("journey").setLevel(level_value)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def log_recommendation(
    logger: logging.Logger,
    tree_id: str,
    recommendation: str,
    confidence: str,
    answer_count: int,
    tie_broken: bool = False,
) -> None:
    """Log a completed recommendation run."""
    payload = {
        "event": "recommendation",
        "tree_id": tree_id,
        "recommendation": recommendation,
        "confidence": confidence,
        "answer_count": answer_count,
        "tie_broken": tie_broken,
        "ts": _now(),
    }
    logger.info("Recommendation: %s", json.dumps(payload, default=str))


def log_validation_result(
    logger: logging.Logger,
    tree_id: Optional[str],
    errors: int,
    warnings: int,
) -> None:
    """Log a tree validation run; WARNING level when the tree has errors."""
    payload = {
        "event": "validation",
        "tree_id": tree_id,
        "errors": errors,
        "warnings": warnings,
        "ts": _now(),
    }
    level = logging.WARNING if errors else logging.INFO
    logger.log(level, "Validation: %s", json.dumps(payload, default=str))
