"""
Utility Helper Functions
========================

Common utility functions used across the project.
"""

import json
import os
import sys
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from loguru import logger

from config import ROOT_DIR


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days"
):
    """
    Setup logging configuration.

    Args:
        level: Logging level
        log_file: Optional log file name, written under logs/
        rotation: Log rotation setting
        retention: Log retention setting
    """
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )

    # Add file handler if specified
    if log_file:
        log_path = ROOT_DIR / "logs" / log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation=rotation,
            retention=retention,
            compression="zip"
        )

    logger.info(f"Logging configured at {level} level")


def get_timestamp() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def format_metrics(metrics: Dict[str, Any], precision: int = 3) -> str:
    """
    Format numeric metric values on a single line for display.

    Args:
        metrics: Dictionary of metric values
        precision: Decimal precision

    Returns:
        String such as "AreaUnderRocCurve=0.812  Accuracy=0.790"
    """
    return "  ".join(
        f"{k}={v:.{precision}f}"
        for k, v in metrics.items()
        if isinstance(v, float)
    )


@contextmanager
def atomic_path(target: Union[str, Path]) -> Iterator[Path]:
    """
    Yield a temporary path next to ``target`` and move it into place on success.

    Readers of ``target`` never observe a partially written file. On error the
    temporary file is removed and ``target`` is left untouched.

    Args:
        target: Final file path
    """
    target = Path(target)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    os.close(fd)
    tmp_path = Path(tmp_name)

    try:
        yield tmp_path
        os.replace(tmp_path, target)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def write_json_atomic(data: Dict[str, Any], target: Union[str, Path]) -> Path:
    """
    Write a JSON document through a temporary file and rename.

    Args:
        data: JSON-serializable dictionary
        target: Output file path

    Returns:
        Path to the written file
    """
    target = Path(target)
    with atomic_path(target) as tmp_path:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    return target


def read_json(path: Union[str, Path]) -> Optional[Dict[str, Any]]:
    """
    Read a JSON object, tolerating missing or malformed files.

    Args:
        path: File to read

    Returns:
        Parsed dictionary, or None if the file is absent, unreadable or not a JSON object
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not parse {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path}: expected a JSON object")
        return None
    return data
