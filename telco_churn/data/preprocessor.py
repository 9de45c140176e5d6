"""
Data Preprocessor Module
========================

Row-level cleaning of raw customer data: field extraction by header name,
decimal parsing, label normalization and validation.
"""

import math
import re
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

import pandas as pd
from loguru import logger
from pydantic import ValidationError

from config import get_config
from telco_churn.data.schema import (
    CLEAN_COLUMNS,
    NUMERICAL_FEATURES,
    TARGET_COLUMN,
    CustomerRecord,
)
from telco_churn.features.labels import churn_to_bool


# Invariant format: "." decimal separator, optional exponent, no grouping
_INVARIANT_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
# Comma-decimal format: "," decimal separator, optional exponent, no grouping
_COMMA_DECIMAL_NUMBER = re.compile(r"^[+-]?(\d+,?\d*|,\d+)([eE][+-]?\d+)?$")


class RowValidationError(ValueError):
    """A raw row failed parsing or validation."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value!r}: {reason}")


class CleaningStats(NamedTuple):
    accepted: int
    rejected: int


def parse_decimal(raw: Optional[str], field: str) -> float:
    """
    Parse a numeric field, trying the invariant format first and the
    comma-decimal format second. Empty input parses to 0.0.

    Args:
        raw: Raw field text
        field: Field name, used in error messages

    Returns:
        Parsed finite float

    Raises:
        RowValidationError: If neither format matches
    """
    text = (raw or "").strip()
    if not text:
        return 0.0

    if _INVARIANT_NUMBER.match(text):
        value = float(text)
    elif _COMMA_DECIMAL_NUMBER.match(text):
        value = float(text.replace(",", "."))
    else:
        raise RowValidationError(field, raw, "not a number")

    if not math.isfinite(value):
        raise RowValidationError(field, raw, "not a finite number")
    return value


def normalize_churn(raw: Optional[str]) -> str:
    """
    Normalize a churn label to "Yes"/"No".

    Unrecognized values are returned unchanged (trimmed).
    """
    text = (raw or "").strip()
    lowered = text.lower()

    if lowered == "yes" or text == "1":
        return "Yes"
    if lowered == "no" or text == "0" or not text:
        return "No"
    return text


class DataPreprocessor:
    """Clean raw customer rows into validated records."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize DataPreprocessor.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()

    @staticmethod
    def _get_field(row: Dict[str, Any], name: str) -> str:
        if name not in row:
            raise RowValidationError(name, None, "column missing from header")
        value = row[name]
        if value is None or (isinstance(value, float) and math.isnan(value)):
            return ""
        return str(value).strip()

    def clean_row(self, row: Dict[str, Any]) -> CustomerRecord:
        """
        Clean and validate one raw row.

        Args:
            row: Mapping of header name to raw text

        Returns:
            Validated CustomerRecord

        Raises:
            RowValidationError: On the first field that fails
        """
        fields = {
            col: self._get_field(row, col)
            for col in CLEAN_COLUMNS
            if col not in NUMERICAL_FEATURES
        }
        for col in NUMERICAL_FEATURES:
            fields[col] = parse_decimal(self._get_field(row, col), col)
        fields[TARGET_COLUMN] = normalize_churn(fields[TARGET_COLUMN])

        try:
            record = CustomerRecord(**fields)
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "record"
            raise RowValidationError(field, row.get(field), error["msg"]) from None

        if record.Churn not in ("Yes", "No"):
            logger.warning(
                f"Unrecognized {TARGET_COLUMN} value {record.Churn!r} kept as-is "
                f"(treated as churn={churn_to_bool(record.Churn)})"
            )
        return record

    def clean_data(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, CleaningStats]:
        """
        Clean a raw DataFrame row by row.

        Rejected rows are logged and counted; they never abort the batch.

        Args:
            df: Raw DataFrame with string cells, columns named by header

        Returns:
            Tuple of (cleaned DataFrame in fixed column order, counts)
        """
        logger.info(f"Cleaning {len(df)} rows...")

        rows: List[Dict[str, Any]] = []
        rejected = 0

        # Header is line 1, first data row is line 2
        for line_no, raw in enumerate(df.to_dict(orient="records"), start=2):
            try:
                rows.append(self.clean_row(raw).to_row())
            except RowValidationError as e:
                rejected += 1
                logger.warning(f"Line {line_no} skipped: {e}")

        cleaned = pd.DataFrame(rows, columns=CLEAN_COLUMNS)
        stats = CleaningStats(accepted=len(rows), rejected=rejected)

        logger.info(f"Data cleaned: {stats.accepted} accepted, {stats.rejected} rejected")
        return cleaned, stats
