"""
Model Evaluator Module
======================

Computes evaluation metrics for a trained churn model and persists the
metrics snapshot.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
from loguru import logger
from sklearn.metrics import accuracy_score, f1_score, roc_auc_score

from config import get_config
from telco_churn.models.predictor import ChurnModel
from telco_churn.utils.helpers import get_timestamp, read_json, write_json_atomic


class ModelEvaluator:
    """Evaluate churn models and persist their metrics."""

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize ModelEvaluator.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()
        self.eval_config = self.config.get("evaluation", {})
        self.threshold = self.eval_config.get("threshold", 0.5)

    def compute_metrics(
        self,
        y_true: np.ndarray,
        y_prob: np.ndarray,
        threshold: Optional[float] = None
    ) -> Dict[str, float]:
        """
        ROC AUC, accuracy and F1 for one set of predictions.

        Args:
            y_true: Boolean labels, both classes present
            y_prob: Predicted churn probabilities
            threshold: Classification threshold

        Returns:
            Dictionary of metrics
        """
        threshold = self.threshold if threshold is None else threshold
        y_pred = y_prob >= threshold

        return {
            "AreaUnderRocCurve": float(roc_auc_score(y_true, y_prob)),
            "Accuracy": float(accuracy_score(y_true, y_pred)),
            "F1Score": float(f1_score(y_true, y_pred, zero_division=0)),
        }

    def evaluate(
        self,
        model: ChurnModel,
        train_df: pd.DataFrame,
        test_df: pd.DataFrame
    ) -> Dict[str, Any]:
        """
        Evaluate on the test set, or on the training set when the test labels
        hold a single class.

        Args:
            model: Trained model
            train_df: Training rows
            test_df: Test rows

        Returns:
            Metrics record with AreaUnderRocCurve, Accuracy, F1Score, Date and
            the name of the evaluated set
        """
        evaluated_on = "test"
        eval_df = test_df
        y_true = model.labels(test_df)

        if len(np.unique(y_true)) < 2:
            logger.warning("Test set has a single class. Evaluating on the training set.")
            evaluated_on = "train"
            eval_df = train_df
            y_true = model.labels(train_df)

        metrics = self.compute_metrics(y_true, model.predict_proba(eval_df), model.threshold)

        logger.info(
            f"{model.model_type} ({evaluated_on}) - AUC: {metrics['AreaUnderRocCurve']:.4f}, "
            f"Accuracy: {metrics['Accuracy']:.4f}, F1: {metrics['F1Score']:.4f}"
        )

        metrics.update({
            "Date": get_timestamp(),
            "EvaluatedOn": evaluated_on,
            "TrainRows": int(len(train_df)),
            "TestRows": int(len(test_df)),
            "ModelType": model.model_type,
        })
        return metrics

    @staticmethod
    def save_metrics(metrics: Dict[str, Any], filepath: Union[str, Path]) -> Path:
        """Write the metrics snapshot, replacing any previous one."""
        path = write_json_atomic(metrics, filepath)
        logger.info(f"Metrics saved to {path}")
        return path

    @staticmethod
    def load_metrics(filepath: Union[str, Path]) -> Optional[Dict[str, Any]]:
        """Read a metrics snapshot; None if absent or malformed."""
        return read_json(filepath)
