import json

import numpy as np
import pytest

from telco_churn.data import DataLoader, DatasetSplitError
from telco_churn.data.schema import LABEL_COLUMN
from telco_churn.models import ChurnModel, ModelEvaluator, ModelTrainer

from factories import make_customers


def test_run_writes_model_and_metrics(config, clean_csv):
    result = ModelTrainer(config).run(data_path=clean_csv)

    assert result.model_path.exists()
    assert result.metrics_path.exists()
    assert not list(result.model_path.parent.glob("*.tmp"))

    metrics = json.loads(result.metrics_path.read_text())
    for key in ("AreaUnderRocCurve", "Accuracy", "F1Score", "Date"):
        assert key in metrics
    assert 0.0 <= metrics["AreaUnderRocCurve"] <= 1.0
    assert metrics["EvaluatedOn"] == "test"
    assert metrics["TrainRows"] + metrics["TestRows"] == 90
    assert metrics["Date"].endswith("+00:00")


@pytest.mark.parametrize("model_name", ["lightgbm", "gradient_boosting"])
def test_trained_model_scores_records(config, customers, model_name):
    trainer = ModelTrainer(config)
    train = DataLoader(config).add_labels(customers)
    model = trainer.train_model(train, model_name=model_name)

    prediction = model.predict({
        "Gender": "Female",
        "Tenure": 2,
        "MonthlyCharges": 95.0,
        "TotalCharges": 190.0,
        "Contract": "Month-to-month",
        "InternetService": "Fiber optic",
    })

    assert isinstance(prediction.Predicted, bool)
    assert 0.0 <= prediction.Probability <= 1.0
    assert prediction.Predicted == (prediction.Probability >= 0.5)
    assert (prediction.Score > 0) == (prediction.Probability > 0.5)


def test_unseen_category_does_not_fail(config, customers):
    model = ModelTrainer(config).train_model(DataLoader(config).add_labels(customers))

    predicted, proba, _ = model.score_frame(customers.assign(Contract="Lifetime", Gender="?"))
    assert len(predicted) == len(customers)
    assert ((proba >= 0) & (proba <= 1)).all()


def test_saved_model_round_trips(config, customers, tmp_path):
    trainer = ModelTrainer(config)
    model = trainer.train_model(DataLoader(config).add_labels(customers))
    path = trainer.save_model(model, tmp_path / "model.joblib")

    loaded = ChurnModel.load(path)
    assert loaded.label_contract == "ChurnYesNoToBool"
    assert loaded.feature_columns == model.feature_columns
    np.testing.assert_allclose(loaded.predict_proba(customers), model.predict_proba(customers))


def test_unknown_model_type(config):
    with pytest.raises(ValueError, match="Unknown model"):
        ModelTrainer(config).create_pipeline("random_forest")


def test_run_fails_without_both_classes(config, tmp_path):
    path = tmp_path / "clean.csv"
    make_customers(n_pos=0, n_neg=20).to_csv(path, index=False)

    with pytest.raises(DatasetSplitError):
        ModelTrainer(config).run(data_path=path)

    assert not (tmp_path / "artifacts" / "model.joblib").exists()


@pytest.mark.parametrize("model_name", ["lightgbm", "gradient_boosting"])
def test_run_fails_when_split_leaves_train_with_one_class(config, tmp_path, model_name):
    path = tmp_path / "clean.csv"
    make_customers(n_pos=1, n_neg=20).to_csv(path, index=False)

    with pytest.raises(DatasetSplitError, match="Positives=0, Negatives=16"):
        ModelTrainer(config).run(data_path=path, model_name=model_name)

    assert not (tmp_path / "artifacts" / "model.joblib").exists()


def test_run_cleans_raw_file_when_clean_file_missing(config, tmp_path, customers):
    loader_config = dict(config, data=dict(config["data"], raw_file="raw.csv", clean_file="none.csv"))
    trainer = ModelTrainer(loader_config)
    trainer.loader.raw_data_path = tmp_path
    trainer.loader.processed_data_path = tmp_path
    customers.to_csv(tmp_path / "raw.csv", index=False)

    df = trainer.load_training_data()
    assert len(df) == len(customers)


def test_load_training_data_without_any_rows(config, tmp_path):
    trainer = ModelTrainer(config)
    trainer.loader.raw_data_path = tmp_path
    trainer.loader.processed_data_path = tmp_path

    with pytest.raises(FileNotFoundError, match="Empty dataset"):
        trainer.load_training_data()


def test_evaluation_falls_back_to_train_on_single_class_test(config, customers):
    labeled = DataLoader(config).add_labels(customers)
    model = ModelTrainer(config).train_model(labeled)
    single_class_test = labeled[~labeled[LABEL_COLUMN]].head(5)

    metrics = ModelEvaluator(config).evaluate(model, labeled, single_class_test)

    assert metrics["EvaluatedOn"] == "train"
    assert 0.0 <= metrics["Accuracy"] <= 1.0


def test_load_metrics_tolerates_malformed_file(tmp_path):
    path = tmp_path / "metrics.json"
    path.write_text("{not json")
    assert ModelEvaluator.load_metrics(path) is None
    assert ModelEvaluator.load_metrics(tmp_path / "missing.json") is None
