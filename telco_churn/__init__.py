"""
Telco Churn Pipeline
====================

Ingestion, training and scoring of a telco customer churn classifier.

Modules:
    - data: CSV loading, row cleaning and stratified splitting
    - features: Feature pipeline and label derivation
    - models: Training, evaluation and the persisted model artifact
    - api: FastAPI scoring service
    - utils: Logging and file helpers
"""

__version__ = "1.0.0"
