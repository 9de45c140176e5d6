"""Shared fixtures for the churn pipeline tests."""

import copy

import pytest

from config import load_config

from factories import make_customers


@pytest.fixture
def config(tmp_path):
    """Project config with artifacts under tmp_path and a small, fast model."""
    cfg = copy.deepcopy(load_config())
    cfg["artifacts"]["dir"] = str(tmp_path / "artifacts")
    cfg["mlflow"]["enabled"] = False
    cfg["model"]["type"] = "lightgbm"
    cfg["model"]["params"]["lightgbm"] = {
        "n_estimators": 20,
        "min_child_samples": 2,
        "random_state": 1,
        "verbose": -1,
    }
    return cfg


@pytest.fixture
def customers():
    return make_customers(n_pos=30, n_neg=60)


@pytest.fixture
def clean_csv(tmp_path, customers):
    path = tmp_path / "telco_clean.csv"
    customers.to_csv(path, index=False)
    return path
