"""
Feature Engineering Module
==========================

Builds the feature vector: one-hot encoded categorical fields followed by the
numeric fields, min-max scaled as a whole.
"""

from typing import List, Optional

from loguru import logger
from sklearn.compose import ColumnTransformer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import MinMaxScaler, OneHotEncoder

from config import get_config
from telco_churn.data.schema import CATEGORICAL_FEATURES, NUMERICAL_FEATURES


class FeatureEngineer:
    """Create the encoding and scaling steps of the model pipeline."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize FeatureEngineer.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()
        self.feature_config = self.config.get("features", {})
        self.categorical_features: List[str] = list(
            self.feature_config.get("categorical", CATEGORICAL_FEATURES)
        )
        self.numerical_features: List[str] = list(
            self.feature_config.get("numerical", NUMERICAL_FEATURES)
        )

    @property
    def input_columns(self) -> List[str]:
        """Columns consumed by the feature pipeline, in feature-vector order."""
        return self.categorical_features + self.numerical_features

    def create_encoder(self) -> ColumnTransformer:
        """
        Encode each categorical column independently and append the numeric columns.

        Categories not seen during fitting encode as all zeros.

        Returns:
            ColumnTransformer producing a dense feature matrix
        """
        transformers = [
            (
                f"{col}_onehot",
                OneHotEncoder(handle_unknown="ignore", sparse_output=False),
                [col],
            )
            for col in self.categorical_features
        ]
        transformers.append(("numerical", "passthrough", self.numerical_features))

        return ColumnTransformer(transformers=transformers, remainder="drop")

    def create_preprocessing_pipeline(self) -> Pipeline:
        """
        Create the encoding + min-max scaling pipeline.

        Returns:
            Unfitted sklearn Pipeline
        """
        return Pipeline([
            ("encode", self.create_encoder()),
            ("scale", MinMaxScaler()),
        ])

    @staticmethod
    def get_feature_names(pipeline: Pipeline) -> List[str]:
        """Names of the encoded features of a fitted preprocessing pipeline."""
        names = list(pipeline.named_steps["encode"].get_feature_names_out())
        logger.debug(f"{len(names)} encoded features")
        return names
