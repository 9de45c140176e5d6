"""
Record Schema
=============

Column layout and validated record models shared by ingestion, training and scoring.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator


ID_COLUMN = "CustomerID"
TARGET_COLUMN = "Churn"
LABEL_COLUMN = "LabelBool"

CATEGORICAL_FEATURES: List[str] = ["Gender", "Contract", "InternetService"]
NUMERICAL_FEATURES: List[str] = ["Tenure", "MonthlyCharges", "TotalCharges"]

# Fixed column order of the cleaned CSV
CLEAN_COLUMNS: List[str] = [
    ID_COLUMN,
    "Gender",
    "Tenure",
    "MonthlyCharges",
    "TotalCharges",
    "Contract",
    "InternetService",
    TARGET_COLUMN,
]

TENURE_MIN = 0.0
TENURE_MAX = 120.0


class CustomerRecord(BaseModel):
    """A cleaned customer row."""

    CustomerID: str = Field(..., description="Customer identifier")
    Gender: str = Field("", description="Customer gender")
    Tenure: float = Field(
        0.0, ge=TENURE_MIN, le=TENURE_MAX, allow_inf_nan=False,
        description="Months since customer joined"
    )
    MonthlyCharges: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Current monthly charge"
    )
    TotalCharges: float = Field(
        0.0, allow_inf_nan=False, description="Total amount charged so far"
    )
    Contract: str = Field("", description="Contract type")
    InternetService: str = Field("", description="Internet service type")
    Churn: str = Field("No", description="Normalized churn label")

    @field_validator("CustomerID")
    @classmethod
    def validate_customer_id(cls, v):
        if not v.strip():
            raise ValueError("CustomerID must not be blank")
        return v

    def to_row(self) -> dict:
        """Return the record as a dict in cleaned-CSV column order."""
        data = self.model_dump()
        return {col: data[col] for col in CLEAN_COLUMNS}


class ChurnPrediction(BaseModel):
    """Result of scoring one customer."""

    Predicted: bool = Field(..., description="Predicted churn")
    Probability: float = Field(..., ge=0, le=1, description="Probability of churn")
    Score: float = Field(..., description="Raw classifier margin (log-odds)")
