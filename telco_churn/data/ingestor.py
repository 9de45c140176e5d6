"""
Ingestion
=========

Reads the raw customer CSV, cleans it row by row and writes the cleaned CSV.
"""

from pathlib import Path
from typing import NamedTuple, Optional, Union

import pandas as pd
from loguru import logger

from config import get_config
from telco_churn.data.data_loader import DataLoader
from telco_churn.data.preprocessor import DataPreprocessor
from telco_churn.data.schema import CLEAN_COLUMNS


class IngestionResult(NamedTuple):
    accepted: int
    rejected: int
    output_path: Path


class Ingestor:
    """Raw CSV to cleaned CSV."""

    def __init__(self, config: Optional[dict] = None):
        self.config = config or get_config()
        self.loader = DataLoader(self.config)
        self.preprocessor = DataPreprocessor(self.config)

    def ingest(
        self,
        input_path: Optional[Union[str, Path]] = None,
        output_path: Optional[Union[str, Path]] = None
    ) -> IngestionResult:
        """
        Clean ``input_path`` into ``output_path``.

        An input without data rows produces a header-only output and zero
        counts. Missing input or an unwritable output raise.

        Args:
            input_path: Raw CSV. Defaults to the configured raw file
            output_path: Cleaned CSV. Defaults to the configured clean file

        Returns:
            IngestionResult with accepted/rejected counts
        """
        input_path = Path(input_path) if input_path else self.loader.raw_file
        output_path = Path(output_path) if output_path else self.loader.clean_file

        raw = self.loader.load_raw_data(input_path)

        if raw.empty:
            logger.warning(f"No data rows in {input_path}, writing empty output")
            path = self.loader.save_clean_data(pd.DataFrame(columns=CLEAN_COLUMNS), output_path)
            return IngestionResult(0, self.loader.skipped_lines, path)

        cleaned, stats = self.preprocessor.clean_data(raw)
        path = self.loader.save_clean_data(cleaned, output_path)

        return IngestionResult(
            accepted=stats.accepted,
            rejected=stats.rejected + self.loader.skipped_lines,
            output_path=path,
        )
