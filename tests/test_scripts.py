import importlib.util
import sys
from pathlib import Path

import pytest

from factories import make_customers

SCRIPTS_DIR = Path(__file__).resolve().parent.parent / "scripts"
HEADER = "CustomerID,Gender,Tenure,MonthlyCharges,TotalCharges,Contract,InternetService,Churn\n"


def load_script(name, config, monkeypatch):
    spec = importlib.util.spec_from_file_location(f"{name}_script", SCRIPTS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "get_config", lambda: config)
    monkeypatch.setattr(module, "setup_logging", lambda **kwargs: None)
    return module


def run_main(module, monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", [f"{module.__name__}.py", *map(str, args)])
    return module.main()


@pytest.fixture
def ingest(config, monkeypatch):
    return load_script("ingest", config, monkeypatch)


@pytest.fixture
def train(config, monkeypatch):
    return load_script("train", config, monkeypatch)


def test_ingest_header_only_input_exits_zero(ingest, monkeypatch, tmp_path):
    raw = tmp_path / "telco.csv"
    raw.write_text(HEADER)
    output = tmp_path / "clean.csv"

    assert run_main(ingest, monkeypatch, "--input", raw, "--output", output) == 0
    assert output.read_text().strip() == HEADER.strip()


def test_ingest_missing_input_exits_one(ingest, monkeypatch, tmp_path):
    code = run_main(
        ingest, monkeypatch, "--input", tmp_path / "missing.csv", "--output", tmp_path / "clean.csv"
    )
    assert code == 1
    assert not (tmp_path / "clean.csv").exists()


def test_train_exits_zero_and_writes_artifacts(train, monkeypatch, clean_csv, tmp_path):
    assert run_main(train, monkeypatch, "--data", clean_csv) == 0
    assert (tmp_path / "artifacts" / "model.joblib").exists()
    assert (tmp_path / "artifacts" / "metrics.json").exists()


def test_train_without_negatives_exits_one(train, monkeypatch, tmp_path):
    path = tmp_path / "clean.csv"
    make_customers(n_pos=20, n_neg=0).to_csv(path, index=False)

    assert run_main(train, monkeypatch, "--data", path) == 1
    assert not (tmp_path / "artifacts" / "model.joblib").exists()


def test_train_single_class_training_split_exits_one(train, monkeypatch, tmp_path):
    path = tmp_path / "clean.csv"
    make_customers(n_pos=1, n_neg=20).to_csv(path, index=False)

    assert run_main(train, monkeypatch, "--data", path, "--model", "gradient_boosting") == 1


def test_train_missing_data_file_exits_one(train, monkeypatch, tmp_path):
    assert run_main(train, monkeypatch, "--data", tmp_path / "missing.csv") == 1
