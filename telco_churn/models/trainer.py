"""
Model Trainer Module
====================

Fits the churn pipeline (encoding, scaling, gradient-boosted classifier),
evaluates it and persists the model and metrics, with optional MLflow
experiment tracking.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Union

import mlflow
import pandas as pd
from lightgbm import LGBMClassifier
from loguru import logger
from sklearn.ensemble import GradientBoostingClassifier
from sklearn.pipeline import Pipeline

from config import MLFLOW_DIR, get_artifact_paths, get_config
from telco_churn.data.data_loader import DataLoader, DatasetSplitError
from telco_churn.data.preprocessor import DataPreprocessor
from telco_churn.data.schema import LABEL_COLUMN
from telco_churn.features.feature_engineer import FeatureEngineer
from telco_churn.features.labels import CHURN_CONTRACT
from telco_churn.models.evaluator import ModelEvaluator
from telco_churn.models.predictor import ChurnModel


class TrainingResult(NamedTuple):
    model_path: Path
    metrics_path: Path
    metrics: Dict[str, Any]


class ModelTrainer:
    """Train and persist churn models."""

    MODELS = {
        "lightgbm": LGBMClassifier,
        "gradient_boosting": GradientBoostingClassifier,
    }

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize ModelTrainer.

        Args:
            config: Configuration dictionary
        """
        self.config = config or get_config()
        self.model_config = self.config.get("model", {})
        self.mlflow_config = self.config.get("mlflow", {})
        self.threshold = self.config.get("evaluation", {}).get("threshold", 0.5)
        self.model_path, self.metrics_path = get_artifact_paths(self.config)

        self.loader = DataLoader(self.config)
        self.feature_engineer = FeatureEngineer(self.config)
        self.evaluator = ModelEvaluator(self.config)

        self.tracking = bool(self.mlflow_config.get("enabled", False))
        if self.tracking:
            self._setup_mlflow()

    def _setup_mlflow(self):
        """Setup MLflow tracking."""
        tracking_uri = self.mlflow_config.get("tracking_uri", "mlflow_runs")
        mlflow_path = MLFLOW_DIR / tracking_uri

        mlflow.set_tracking_uri(mlflow_path.as_uri())
        experiment_name = self.mlflow_config.get("experiment_name", "telco_churn")

        # Create experiment if it doesn't exist
        experiment = mlflow.get_experiment_by_name(experiment_name)
        if experiment is None:
            mlflow.create_experiment(experiment_name)
        mlflow.set_experiment(experiment_name)

        logger.info(f"MLflow tracking URI: {mlflow_path}")
        logger.info(f"MLflow experiment: {experiment_name}")

    def get_params(self, model_name: str) -> Dict[str, Any]:
        """Configured classifier parameters for ``model_name``."""
        return dict(self.model_config.get("params", {}).get(model_name) or {})

    def create_pipeline(self, model_name: str, params: Optional[dict] = None) -> Pipeline:
        """
        Create the full unfitted pipeline: encode, scale, classify.

        Args:
            model_name: Key of MODELS
            params: Classifier parameters (overrides config)

        Returns:
            sklearn Pipeline
        """
        if model_name not in self.MODELS:
            raise ValueError(f"Unknown model: {model_name}. Available: {list(self.MODELS.keys())}")

        if params is None:
            params = self.get_params(model_name)

        preprocessing = self.feature_engineer.create_preprocessing_pipeline()
        return Pipeline(preprocessing.steps + [("classifier", self.MODELS[model_name](**params))])

    def train_model(
        self,
        train_df: pd.DataFrame,
        model_name: Optional[str] = None,
        params: Optional[dict] = None
    ) -> ChurnModel:
        """
        Fit a model on labeled training rows.

        Args:
            train_df: Training rows with a LabelBool column
            model_name: Classifier to use. Defaults to config model.type
            params: Classifier parameters (overrides config)

        Returns:
            Fitted ChurnModel

        Raises:
            DatasetSplitError: If the training rows lack either class
        """
        model_name = model_name or self.model_config.get("type", "lightgbm")

        positives = int(train_df[LABEL_COLUMN].sum())
        negatives = len(train_df) - positives
        if positives == 0 or negatives == 0:
            raise DatasetSplitError(
                "The training set needs at least one churned and one retained customer "
                "after the test split. "
                f"Positives={positives}, Negatives={negatives}"
            )

        pipeline = self.create_pipeline(model_name, params)

        model = ChurnModel(
            pipeline=pipeline,
            categorical_features=self.feature_engineer.categorical_features,
            numerical_features=self.feature_engineer.numerical_features,
            model_type=model_name,
            label_contract=CHURN_CONTRACT,
            threshold=self.threshold,
            training_rows=len(train_df),
        )

        logger.info(f"Training {model_name} on {len(train_df)} rows...")
        model.pipeline.fit(model.to_frame(train_df), train_df[LABEL_COLUMN].to_numpy(dtype=bool))

        n_features = len(FeatureEngineer.get_feature_names(model.pipeline))
        logger.info(f"{model_name} fitted on {n_features} features")
        return model

    def save_model(self, model: ChurnModel, filepath: Optional[Path] = None) -> Path:
        """
        Save a trained model to disk.

        Args:
            model: Model to save
            filepath: Optional custom filepath

        Returns:
            Path to saved model
        """
        return model.save(filepath or self.model_path)

    def load_training_data(self, data_path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
        """
        Load cleaned training data.

        An explicit path is read as a cleaned CSV. Otherwise the configured
        cleaned file is used if it has data rows, falling back to cleaning the
        raw file in memory.

        Args:
            data_path: Optional cleaned CSV path

        Returns:
            Cleaned DataFrame
        """
        if data_path is not None:
            return self.loader.load_clean_data(data_path)

        if self.loader.has_rows(self.loader.clean_file):
            return self.loader.load_clean_data()

        if self.loader.has_rows(self.loader.raw_file):
            logger.warning(
                f"No cleaned data at {self.loader.clean_file}, cleaning {self.loader.raw_file}"
            )
            cleaned, _ = DataPreprocessor(self.config).clean_data(self.loader.load_raw_data())
            return cleaned

        raise FileNotFoundError(
            f"Empty dataset. clean='{self.loader.clean_file}', raw='{self.loader.raw_file}'"
        )

    def run(
        self,
        data_path: Optional[Union[str, Path]] = None,
        model_name: Optional[str] = None
    ) -> TrainingResult:
        """
        Full training run: load, split, fit, evaluate, persist.

        Args:
            data_path: Optional cleaned CSV path
            model_name: Optional classifier override

        Returns:
            TrainingResult with artifact paths and metrics

        Raises:
            DatasetSplitError: If the data or its training split lacks either class
        """
        df = self.loader.add_labels(self.load_training_data(data_path))
        if df.empty:
            raise DatasetSplitError("No rows available for training")

        summary = self.loader.validate_data(df)
        logger.info(
            f"{summary['total_rows']} rows: {summary['positives']} churned, "
            f"{summary['negatives']} retained"
        )
        if summary["duplicate_ids"]:
            logger.warning(f"{summary['duplicate_ids']} duplicate CustomerID values")

        split = self.loader.get_train_test_split(df)

        model = self.train_model(split.train, model_name)
        metrics = self.evaluator.evaluate(model, split.train, split.test)

        model_path = self.save_model(model)
        metrics_path = self.evaluator.save_metrics(metrics, self.metrics_path)

        if self.tracking:
            self._log_run(model, metrics, model_path, metrics_path)

        return TrainingResult(model_path, metrics_path, metrics)

    def _log_run(
        self,
        model: ChurnModel,
        metrics: Dict[str, Any],
        model_path: Path,
        metrics_path: Path
    ):
        """Log a finished run to MLflow."""
        run_name = f"{model.model_type}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        with mlflow.start_run(run_name=run_name):
            mlflow.set_tag("model_type", model.model_type)
            mlflow.set_tag("evaluated_on", metrics["EvaluatedOn"])
            mlflow.log_params(model.pipeline.named_steps["classifier"].get_params())
            mlflow.log_metric("auc", metrics["AreaUnderRocCurve"])
            mlflow.log_metric("accuracy", metrics["Accuracy"])
            mlflow.log_metric("f1", metrics["F1Score"])
            mlflow.log_artifact(str(model_path))
            mlflow.log_artifact(str(metrics_path))
