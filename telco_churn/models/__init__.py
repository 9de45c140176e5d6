"""Models module for training, evaluation and scoring."""

from .predictor import ChurnModel
from .trainer import ModelTrainer, TrainingResult
from .evaluator import ModelEvaluator

__all__ = ["ChurnModel", "ModelTrainer", "TrainingResult", "ModelEvaluator"]
