"""Feature engineering and label derivation."""

from .feature_engineer import FeatureEngineer
from .labels import (
    CHURN_CONTRACT,
    LabelDerivation,
    churn_to_bool,
    get_label_transform,
    register_label_transform,
)

__all__ = [
    "FeatureEngineer",
    "CHURN_CONTRACT",
    "LabelDerivation",
    "churn_to_bool",
    "get_label_transform",
    "register_label_transform",
]
