"""FastAPI scoring service module."""

from .main import app, create_app, ScoringService
from .schemas import ScoreRequest, ScoreResponse, ModelInfo

__all__ = ["app", "create_app", "ScoringService", "ScoreRequest", "ScoreResponse", "ModelInfo"]
