"""
Ingestion Script
================

Clean the raw customer CSV into the fixed-schema CSV used for training.

Usage:
    python scripts/ingest.py
    python scripts/ingest.py --input data/raw/telco.csv --output data/processed/telco_clean.csv
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from config import get_config
from telco_churn.data import Ingestor
from telco_churn.utils import setup_logging


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Clean raw churn data")

    parser.add_argument(
        "--input",
        type=str,
        default=None,
        help="Raw CSV path (default: data/raw/<data.raw_file>)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Cleaned CSV path (default: data/processed/<data.clean_file>)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    return parser.parse_args()


def main() -> int:
    """Run ingestion; returns the process exit code."""
    args = parse_args()
    config = get_config()
    log_config = config.get("logging", {})

    setup_logging(
        level=args.log_level or log_config.get("level", "INFO"),
        log_file=log_config.get("file")
    )

    try:
        result = Ingestor(config).ingest(args.input, args.output)
    except OSError as e:
        logger.error(f"Ingestion failed: {e}")
        return 1

    logger.info(f"Done. Accepted: {result.accepted} | Rejected: {result.rejected}")
    logger.info(f"Output: {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
