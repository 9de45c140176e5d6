"""
Label Derivation
================

Maps raw churn labels to booleans. The mapping is registered under a stable
contract name so that training, evaluation and model loading all resolve the
same function instead of re-implementing it.
"""

from typing import Callable, Dict, Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin


CHURN_CONTRACT = "ChurnYesNoToBool"


def churn_to_bool(label: Optional[str]) -> bool:
    """True if the trimmed label is non-empty and starts with "Y" (any case)."""
    if label is None:
        return False
    label = str(label).strip()
    return label[:1] in ("Y", "y")


_LABEL_TRANSFORMS: Dict[str, Callable[[Optional[str]], bool]] = {
    CHURN_CONTRACT: churn_to_bool,
}


def register_label_transform(name: str, func: Callable[[Optional[str]], bool]):
    """Register a label transformation under a contract name."""
    existing = _LABEL_TRANSFORMS.get(name)
    if existing is not None and existing is not func:
        raise ValueError(f"Label transform '{name}' is already registered")
    _LABEL_TRANSFORMS[name] = func


def get_label_transform(name: str) -> Callable[[Optional[str]], bool]:
    """Resolve a label transformation by contract name."""
    try:
        return _LABEL_TRANSFORMS[name]
    except KeyError:
        raise KeyError(
            f"No label transform registered as '{name}'. "
            f"Available: {sorted(_LABEL_TRANSFORMS)}"
        ) from None


class LabelDerivation(BaseEstimator, TransformerMixin):
    """
    Stateless transformer applying a registered label mapping.

    Only the contract name is stored, so a pickled instance resolves the
    function from the registry again when it is used after loading.
    """

    def __init__(self, contract_name: str = CHURN_CONTRACT):
        self.contract_name = contract_name

    def fit(self, X, y=None):
        get_label_transform(self.contract_name)
        return self

    def transform(self, X) -> np.ndarray:
        func = get_label_transform(self.contract_name)
        values = pd.Series(np.asarray(X).ravel(), dtype=object)
        return values.map(func).to_numpy(dtype=bool)
