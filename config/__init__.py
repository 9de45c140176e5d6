"""Configuration module for the Telco Churn pipeline."""

import os
from pathlib import Path

import yaml

# Project root directory
ROOT_DIR = Path(__file__).parent.parent.absolute()

# Load configuration
CONFIG_PATH = Path(
    os.environ.get("TELCO_CHURN_CONFIG", ROOT_DIR / "config" / "config.yaml")
)


def load_config(path=None) -> dict:
    """Load configuration from YAML file."""
    with open(path or CONFIG_PATH, "r") as f:
        config = yaml.safe_load(f)
    return config or {}


def get_config() -> dict:
    """Get configuration dictionary."""
    return load_config()


# Export commonly used paths
DATA_DIR = ROOT_DIR / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"
ARTIFACTS_DIR = ROOT_DIR / "artifacts"
MLFLOW_DIR = ARTIFACTS_DIR / "mlflow"


def get_artifact_paths(config: dict):
    """Return (model_path, metrics_path) for a configuration."""
    artifacts = config.get("artifacts", {})
    artifacts_dir = ROOT_DIR / artifacts["dir"] if artifacts.get("dir") else ARTIFACTS_DIR
    return (
        artifacts_dir / artifacts.get("model_file", "model.joblib"),
        artifacts_dir / artifacts.get("metrics_file", "metrics.json"),
    )


# Create directories if they don't exist
for dir_path in [RAW_DATA_DIR, PROCESSED_DATA_DIR, ARTIFACTS_DIR]:
    dir_path.mkdir(parents=True, exist_ok=True)
