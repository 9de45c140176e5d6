"""
Data Loader Module
==================

Handles reading raw and cleaned customer CSVs, writing cleaned output and
splitting labeled data into stratified train/test sets.
"""

import csv
from pathlib import Path
from typing import List, NamedTuple, Optional, Union

import numpy as np
import pandas as pd
from loguru import logger

from config import RAW_DATA_DIR, PROCESSED_DATA_DIR, get_config
from telco_churn.data.schema import (
    CLEAN_COLUMNS,
    ID_COLUMN,
    LABEL_COLUMN,
    NUMERICAL_FEATURES,
    TARGET_COLUMN,
)
from telco_churn.features.labels import CHURN_CONTRACT, LabelDerivation


class DatasetSplitError(ValueError):
    """The labeled dataset cannot be split into usable train/test sets."""


class DatasetSplit(NamedTuple):
    train: pd.DataFrame
    test: pd.DataFrame


class DataLoader:
    """Load, save and split datasets for churn prediction."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize DataLoader.

        Args:
            config: Configuration dictionary. If None, loads from config.yaml
        """
        self.config = config or get_config()
        self.data_config = self.config.get("data", {})
        self.delimiters = self.config.get("ingestion", {}).get("delimiters", ",;\t|")
        self.raw_data_path = RAW_DATA_DIR
        self.processed_data_path = PROCESSED_DATA_DIR
        self.skipped_lines = 0

    @property
    def raw_file(self) -> Path:
        return self.raw_data_path / self.data_config.get("raw_file", "telco.csv")

    @property
    def clean_file(self) -> Path:
        return self.processed_data_path / self.data_config.get("clean_file", "telco_clean.csv")

    def detect_delimiter(self, header_line: str) -> str:
        """
        Guess the delimiter from the header line.

        Args:
            header_line: First line of the file

        Returns:
            Detected delimiter, "," if none of the candidates fits
        """
        try:
            return csv.Sniffer().sniff(header_line, delimiters=self.delimiters).delimiter
        except csv.Error:
            return ","

    def load_raw_data(self, file_path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
        """
        Load a raw CSV with every cell kept as text.

        Lines with more fields than the header are skipped and
        counted in ``skipped_lines``.

        Args:
            file_path: Path to the raw file. Defaults to the configured raw file

        Returns:
            DataFrame of strings; empty with no columns for a zero-byte file
        """
        file_path = Path(file_path) if file_path else self.raw_file
        self.skipped_lines = 0

        if not file_path.exists():
            logger.error(f"Data file not found: {file_path}")
            raise FileNotFoundError(f"Data file not found: {file_path}")

        logger.info(f"Loading data from {file_path}")

        with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
            header_line = f.readline()
        if not header_line.strip():
            logger.warning(f"{file_path} is empty")
            return pd.DataFrame()

        delimiter = self.detect_delimiter(header_line)
        logger.debug(f"Detected delimiter {delimiter!r}")

        def _skip_bad_line(fields: List[str]) -> None:
            self.skipped_lines += 1
            logger.warning(
                f"Skipping malformed line with {len(fields)} fields: {delimiter.join(fields)[:80]}"
            )
            return None

        df = pd.read_csv(
            file_path,
            sep=delimiter,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
        df.columns = [str(col).strip() for col in df.columns]

        logger.info(f"Loaded {len(df)} rows and {len(df.columns)} columns")
        return df

    def load_clean_data(self, file_path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
        """
        Load a cleaned CSV with typed columns.

        Args:
            file_path: Path to the cleaned file. Defaults to the configured clean file

        Returns:
            DataFrame in cleaned column order
        """
        file_path = Path(file_path) if file_path else self.clean_file

        if not file_path.exists():
            logger.error(f"Cleaned data not found: {file_path}")
            raise FileNotFoundError(f"Cleaned data not found: {file_path}")

        logger.info(f"Loading cleaned data from {file_path}")

        dtypes = {col: str for col in CLEAN_COLUMNS}
        dtypes.update({col: float for col in NUMERICAL_FEATURES})
        df = pd.read_csv(file_path, dtype=dtypes, keep_default_na=False)

        return df[CLEAN_COLUMNS]

    def save_clean_data(
        self,
        df: pd.DataFrame,
        file_path: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save cleaned data, always with a header, overwriting any prior file.

        Args:
            df: Cleaned DataFrame
            file_path: Output path. Defaults to the configured clean file

        Returns:
            Path to saved file
        """
        file_path = Path(file_path) if file_path else self.clean_file
        file_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Saving cleaned data to {file_path}")
        df.reindex(columns=CLEAN_COLUMNS).to_csv(file_path, index=False)

        return file_path

    @staticmethod
    def has_rows(file_path: Union[str, Path]) -> bool:
        """True if the file exists and has at least one line after the header."""
        file_path = Path(file_path)
        if not file_path.is_file():
            return False
        with open(file_path, "r", encoding="utf-8-sig") as f:
            f.readline()
            return any(line.strip() for line in f)

    def add_labels(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Derive the boolean label column from the raw churn label.

        Args:
            df: Cleaned DataFrame

        Returns:
            Copy of ``df`` with a LabelBool column
        """
        df = df.copy()
        derivation = LabelDerivation(CHURN_CONTRACT).fit(df[TARGET_COLUMN])
        df[LABEL_COLUMN] = derivation.transform(df[TARGET_COLUMN])
        return df

    def get_train_test_split(
        self,
        df: pd.DataFrame,
        test_divisor: Optional[int] = None,
        random_state: Optional[int] = None
    ) -> DatasetSplit:
        """
        Split labeled data into train and test sets, stratified by label.

        Each class contributes ``max(1, n // test_divisor)`` shuffled examples to
        the test set. Every row whose identifier is not in the test set goes to
        train.

        Args:
            df: Cleaned DataFrame, with or without a LabelBool column
            test_divisor: One in this many examples per class goes to test
            random_state: Shuffle seed

        Returns:
            DatasetSplit of (train, test)

        Raises:
            DatasetSplitError: If either class is absent
        """
        test_divisor = test_divisor or self.data_config.get("test_divisor", 5)
        if random_state is None:
            random_state = self.data_config.get("random_state", 1)

        if LABEL_COLUMN not in df.columns:
            df = self.add_labels(df)

        positives = df[df[LABEL_COLUMN]]
        negatives = df[~df[LABEL_COLUMN]]

        if positives.empty or negatives.empty:
            raise DatasetSplitError(
                "The dataset needs at least one churned and one retained customer. "
                f"Positives={len(positives)}, Negatives={len(negatives)}"
            )

        rng = np.random.default_rng(random_state)
        test_parts = []
        for group in (positives, negatives):
            take = min(max(1, len(group) // test_divisor), len(group))
            order = rng.permutation(len(group))
            test_parts.append(group.iloc[order[:take]])

        test = pd.concat(test_parts)
        test_keys = set(test[ID_COLUMN])
        train = df[~df[ID_COLUMN].isin(test_keys)]

        logger.info(
            f"Train set: {len(train)} samples, test set: {len(test)} samples "
            f"({len(test_parts[0])} churned, {len(test_parts[1])} retained)"
        )

        return DatasetSplit(
            train=train.reset_index(drop=True),
            test=test.reset_index(drop=True),
        )

    def validate_data(self, df: pd.DataFrame) -> dict:
        """
        Summarize a labeled dataset.

        Args:
            df: Cleaned DataFrame

        Returns:
            Dictionary with row count, duplicate identifiers and class counts
        """
        if LABEL_COLUMN not in df.columns:
            df = self.add_labels(df)

        return {
            "total_rows": len(df),
            "duplicate_ids": int(df[ID_COLUMN].duplicated().sum()),
            "positives": int(df[LABEL_COLUMN].sum()),
            "negatives": int((~df[LABEL_COLUMN]).sum()),
        }
