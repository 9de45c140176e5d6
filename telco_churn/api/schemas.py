"""
API Schemas (Pydantic Models)
=============================

Data validation models for API requests and responses.
"""

import uuid
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from telco_churn.data.schema import CATEGORICAL_FEATURES, ChurnPrediction


class ScoreRequest(BaseModel):
    """Schema for a scoring request. Every field is optional."""

    CustomerID: Optional[str] = Field(None, description="Customer identifier, generated if absent")
    Gender: Optional[str] = Field(None, description="Customer gender")
    Tenure: float = Field(0.0, description="Months since customer joined")
    MonthlyCharges: float = Field(0.0, description="Current monthly charge")
    TotalCharges: float = Field(0.0, description="Total amount charged so far")
    Contract: Optional[str] = Field(None, description="Contract type")
    InternetService: Optional[str] = Field(None, description="Internet service type")

    def to_record(self, defaults: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Build a model input record, filling absent categorical fields.

        Args:
            defaults: Values for Gender, Contract and InternetService, from
                the api.defaults config section. A field with no value and no
                default is left empty

        Returns:
            Record dictionary
        """
        defaults = defaults or {}
        record = self.model_dump()
        record["CustomerID"] = self.CustomerID or uuid.uuid4().hex
        for field in CATEGORICAL_FEATURES:
            if record[field] is None:
                record[field] = defaults.get(field, "")
        return record

    class Config:
        json_schema_extra = {
            "example": {
                "CustomerID": "C9999",
                "Gender": "Female",
                "Tenure": 3,
                "MonthlyCharges": 120.0,
                "TotalCharges": 360.0,
                "Contract": "Month-to-month",
                "InternetService": "Fiber optic",
            }
        }


class ScoreResponse(ChurnPrediction):
    """Schema for a scoring response."""

    class Config:
        json_schema_extra = {
            "example": {"Predicted": True, "Probability": 0.81, "Score": 1.45}
        }


class ModelInfo(BaseModel):
    """Schema for model information."""

    modelExists: bool
    modelPath: str
    metrics: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str = "ok"
