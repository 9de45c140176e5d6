"""
Training Script
===============

Command-line script to train the churn model and write its metrics.

Usage:
    python scripts/train.py
    python scripts/train.py --model gradient_boosting --data data/processed/telco_clean.csv
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger

from config import get_config
from telco_churn.data import DatasetSplitError
from telco_churn.models import ModelTrainer
from telco_churn.utils import format_metrics, setup_logging


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Train the churn prediction model")

    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Cleaned CSV path (default: cleaned file, else raw file cleaned in memory)"
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        choices=list(ModelTrainer.MODELS.keys()),
        help="Classifier to train (default: model.type from config)"
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
    """Main training function; returns the process exit code."""
    args = parse_args()
    config = get_config()
    log_config = config.get("logging", {})

    setup_logging(
        level=args.log_level or log_config.get("level", "INFO"),
        log_file=log_config.get("file") or "training.log"
    )
    logger.info("Starting model training...")

    try:
        result = ModelTrainer(config).run(data_path=args.data, model_name=args.model)
    except (DatasetSplitError, OSError) as e:
        logger.error(f"Training failed: {e}")
        return 1

    logger.info(format_metrics(result.metrics))
    logger.info(f"Model saved to: {result.model_path}")
    logger.info(f"Metrics saved to: {result.metrics_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
