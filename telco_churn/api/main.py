"""
FastAPI Main Application
========================

REST API for churn scoring.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse
from loguru import logger

from config import get_artifact_paths, get_config
from telco_churn.models.evaluator import ModelEvaluator
from telco_churn.models.predictor import ChurnModel
from .demo import DEMO_HTML
from .schemas import HealthResponse, ModelInfo, ScoreRequest, ScoreResponse


class ScoringService:
    """Holds the model loaded at startup. The model is never reloaded."""

    def __init__(
        self,
        model_path: Optional[Union[str, Path]] = None,
        metrics_path: Optional[Union[str, Path]] = None,
        config: Optional[dict] = None
    ):
        self.config = config or get_config()
        default_model, default_metrics = get_artifact_paths(self.config)
        self.model_path = Path(model_path) if model_path else default_model
        self.metrics_path = Path(metrics_path) if metrics_path else default_metrics
        self.defaults: Dict[str, str] = self.config.get("api", {}).get("defaults") or {}
        self.model: Optional[ChurnModel] = None

    def load(self):
        """Load the model if present; otherwise stay in degraded mode."""
        if self.model is not None:
            return

        if self.model_path.exists():
            self.model = ChurnModel.load(self.model_path)
        else:
            logger.warning(
                f"Model not found at {self.model_path}. Run scripts/train.py first; "
                "scoring requests will fail until then."
            )

    def info(self) -> Dict[str, Any]:
        return {
            "modelExists": self.model_path.exists(),
            "modelPath": str(self.model_path),
            "metrics": ModelEvaluator.load_metrics(self.metrics_path),
        }


def create_app(service: Optional[ScoringService] = None) -> FastAPI:
    """
    Build the FastAPI application around a scoring service.

    Args:
        service: Scoring service. Defaults to one using the configured paths

    Returns:
        FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.service is None:
            app.state.service = ScoringService()
        app.state.service.load()
        logger.info("Churn Scoring API started")
        yield

    app = FastAPI(
        title="Churn Scoring API",
        description="Telco customer churn scoring service",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.service = service

    @app.get("/", response_class=PlainTextResponse, tags=["Root"])
    async def root():
        """Usage hint."""
        return "Churn Scoring API - use /docs, /demo or POST /score"

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return HealthResponse(status="ok")

    @app.post("/score", response_model=ScoreResponse, tags=["Predictions"])
    def score(request: ScoreRequest):
        """Score a single customer."""
        svc: ScoringService = app.state.service
        if svc.model is None:
            raise HTTPException(
                status_code=503,
                detail="Model not loaded. Please train a model first."
            )

        record = request.to_record(svc.defaults)
        try:
            prediction = svc.model.predict(record)
        except Exception as e:
            logger.error(f"Scoring error for {record['CustomerID']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return ScoreResponse(**prediction.model_dump())

    @app.get("/model/info", response_model=ModelInfo, tags=["Model"])
    async def get_model_info():
        """Report whether a model artifact exists and its latest metrics."""
        return ModelInfo(**app.state.service.info())

    @app.get("/demo", response_class=HTMLResponse, tags=["Demo"])
    async def demo():
        """Browser form posting to /score."""
        return HTMLResponse(DEMO_HTML)

    return app


app = create_app()


# Run with: uvicorn telco_churn.api.main:app
if __name__ == "__main__":
    import uvicorn

    config = get_config()
    api_config = config.get("api", {})

    uvicorn.run(
        "telco_churn.api.main:app",
        host=api_config.get("host", "0.0.0.0"),
        port=api_config.get("port", 8000),
        reload=api_config.get("reload", False)
    )
