"""
Churn Model Artifact
====================

The persisted unit shared by training and scoring: the fitted feature +
classifier pipeline together with the schema and label contract it was
trained against.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import joblib
import numpy as np
import pandas as pd
from loguru import logger
from sklearn.pipeline import Pipeline

from telco_churn.data.schema import TARGET_COLUMN, ChurnPrediction
from telco_churn.features.labels import CHURN_CONTRACT, get_label_transform
from telco_churn.utils.helpers import atomic_path, get_timestamp

_PROBA_EPS = 1e-15


class ChurnModel:
    """A fitted churn pipeline plus the schema it expects."""

    def __init__(
        self,
        pipeline: Pipeline,
        categorical_features: List[str],
        numerical_features: List[str],
        model_type: str,
        label_contract: str = CHURN_CONTRACT,
        threshold: float = 0.5,
        training_rows: int = 0,
        trained_at: Optional[str] = None
    ):
        self.pipeline = pipeline
        self.categorical_features = list(categorical_features)
        self.numerical_features = list(numerical_features)
        self.model_type = model_type
        self.label_contract = label_contract
        self.threshold = threshold
        self.training_rows = training_rows
        self.trained_at = trained_at or get_timestamp()
        self.label_transform = get_label_transform(label_contract)

    def __getstate__(self) -> Dict[str, Any]:
        # The label function is stored by contract name only
        state = self.__dict__.copy()
        state.pop("label_transform", None)
        return state

    def __setstate__(self, state: Dict[str, Any]):
        self.__dict__.update(state)
        self.label_transform = get_label_transform(self.label_contract)

    @property
    def feature_columns(self) -> List[str]:
        return self.categorical_features + self.numerical_features

    def to_frame(self, records: Union[pd.DataFrame, List[Dict[str, Any]]]) -> pd.DataFrame:
        """Select and type the feature columns expected by the pipeline."""
        df = records if isinstance(records, pd.DataFrame) else pd.DataFrame(records)

        missing = [col for col in self.feature_columns if col not in df.columns]
        if missing:
            raise ValueError(f"Missing feature columns: {missing}")

        features = df[self.feature_columns].copy()
        features[self.categorical_features] = features[self.categorical_features].astype(str)
        features[self.numerical_features] = features[self.numerical_features].astype(float)
        return features

    def labels(self, df: pd.DataFrame) -> np.ndarray:
        """Boolean labels derived from the raw churn column."""
        return df[TARGET_COLUMN].map(self.label_transform).to_numpy(dtype=bool)

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        """Probability of churn for each row."""
        return self.pipeline.predict_proba(self.to_frame(df))[:, 1]

    def score_frame(self, df: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Score every row of ``df``.

        Returns:
            Tuple of (predicted labels, probabilities, raw log-odds scores)
        """
        proba = self.predict_proba(df)
        clipped = np.clip(proba, _PROBA_EPS, 1 - _PROBA_EPS)
        scores = np.log(clipped) - np.log1p(-clipped)
        return proba >= self.threshold, proba, scores

    def predict(self, record: Dict[str, Any]) -> ChurnPrediction:
        """
        Score a single customer.

        Args:
            record: Mapping with at least the feature columns

        Returns:
            ChurnPrediction
        """
        predicted, proba, scores = self.score_frame(pd.DataFrame([record]))
        return ChurnPrediction(
            Predicted=bool(predicted[0]),
            Probability=float(proba[0]),
            Score=float(scores[0]),
        )

    def save(self, filepath: Union[str, Path]) -> Path:
        """
        Save the model, replacing any existing file atomically.

        Args:
            filepath: Target path

        Returns:
            Path to saved model
        """
        filepath = Path(filepath)
        with atomic_path(filepath) as tmp_path:
            joblib.dump(self, tmp_path)
        logger.info(f"Model saved to {filepath}")
        return filepath

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> "ChurnModel":
        """
        Load a model from disk.

        Args:
            filepath: Model path

        Returns:
            Loaded ChurnModel
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"Model not found: {filepath}")

        model = joblib.load(filepath)
        if not isinstance(model, cls):
            raise TypeError(f"{filepath} does not contain a {cls.__name__}")

        logger.info(f"Model loaded from {filepath} ({model.model_type}, trained {model.trained_at})")
        return model
