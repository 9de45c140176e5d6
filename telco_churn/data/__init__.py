"""Data module for loading, cleaning and splitting customer data."""

from .data_loader import DataLoader, DatasetSplit, DatasetSplitError
from .ingestor import Ingestor, IngestionResult
from .preprocessor import DataPreprocessor, RowValidationError

__all__ = [
    "DataLoader",
    "DatasetSplit",
    "DatasetSplitError",
    "Ingestor",
    "IngestionResult",
    "DataPreprocessor",
    "RowValidationError",
]
