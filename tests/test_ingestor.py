import pandas as pd
import pytest

from telco_churn.data import DataLoader, Ingestor
from telco_churn.data.schema import CLEAN_COLUMNS

HEADER = "CustomerID,Gender,Tenure,MonthlyCharges,TotalCharges,Contract,InternetService,Churn\n"


def write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_ingest_skips_malformed_row(config, tmp_path):
    raw = write(tmp_path / "telco.csv", HEADER + (
        "C1,Female,1,29.85,29.85,Month-to-month,DSL,No\n"
        "C2,Male,34,56.95,1889.5,One year,DSL,No\n"
        "C3,Male,2,abc,108.15,Month-to-month,DSL,Yes\n"
        "C4,Male,45,42.30,1840.75,One year,DSL,0\n"
        "C5,Female,2,70.70,151.65,Month-to-month,Fiber optic,1\n"
    ))
    output = tmp_path / "out" / "telco_clean.csv"

    result = Ingestor(config).ingest(raw, output)

    assert (result.accepted, result.rejected) == (4, 1)
    assert result.output_path == output

    cleaned = pd.read_csv(output, dtype=str)
    assert list(cleaned.columns) == CLEAN_COLUMNS
    assert len(cleaned) == 4
    assert "C3" not in cleaned["CustomerID"].tolist()
    assert cleaned["Churn"].tolist() == ["No", "No", "No", "Yes"]


def test_ingest_rejects_blank_id_and_tenure_out_of_range(config, tmp_path):
    raw = write(tmp_path / "telco.csv", HEADER + (
        " ,Female,1,29.85,29.85,Month-to-month,DSL,No\n"
        "C2,Male,150,56.95,1889.5,One year,DSL,No\n"
        "C3,Male,-2,56.95,1889.5,One year,DSL,No\n"
        "C4,Male,120,42.30,1840.75,One year,DSL,Yes\n"
    ))
    result = Ingestor(config).ingest(raw, tmp_path / "clean.csv")

    assert (result.accepted, result.rejected) == (1, 3)
    cleaned = pd.read_csv(result.output_path, dtype=str)
    assert cleaned["CustomerID"].tolist() == ["C4"]


def test_ingest_semicolon_delimiter_and_comma_decimals(config, tmp_path):
    raw = write(tmp_path / "telco.csv", (
        "CustomerID;Gender;Tenure;MonthlyCharges;TotalCharges;Contract;InternetService;Churn\n"
        "C1;Female;1;29,85;1234,50;Month-to-month;DSL;yes\n"
    ))
    result = Ingestor(config).ingest(raw, tmp_path / "clean.csv")

    assert result.accepted == 1
    cleaned = DataLoader(config).load_clean_data(result.output_path)
    row = cleaned.iloc[0]
    assert row["MonthlyCharges"] == pytest.approx(29.85)
    assert row["TotalCharges"] == pytest.approx(1234.5)
    assert row["Churn"] == "Yes"
    # Output is always comma separated
    assert result.output_path.read_text().splitlines()[0] == HEADER.strip()


def test_ingest_reads_columns_by_name(config, tmp_path):
    raw = write(tmp_path / "telco.csv", (
        "Churn,InternetService,Contract,TotalCharges,MonthlyCharges,Tenure,Gender,CustomerID,Extra\n"
        "Yes,Fiber optic,Month-to-month,151.65,70.70,2,Female,C9,ignored\n"
    ))
    result = Ingestor(config).ingest(raw, tmp_path / "clean.csv")

    cleaned = DataLoader(config).load_clean_data(result.output_path)
    assert list(cleaned.columns) == CLEAN_COLUMNS
    assert cleaned.iloc[0]["CustomerID"] == "C9"
    assert cleaned.iloc[0]["MonthlyCharges"] == pytest.approx(70.70)


def test_ingest_header_only_input(config, tmp_path):
    raw = write(tmp_path / "telco.csv", HEADER)
    output = tmp_path / "clean.csv"
    write(output, "stale content\n")

    result = Ingestor(config).ingest(raw, output)

    assert (result.accepted, result.rejected) == (0, 0)
    assert output.read_text().strip() == HEADER.strip()


def test_ingest_zero_byte_input(config, tmp_path):
    raw = write(tmp_path / "telco.csv", "")
    result = Ingestor(config).ingest(raw, tmp_path / "clean.csv")

    assert (result.accepted, result.rejected) == (0, 0)
    assert result.output_path.read_text().strip() == HEADER.strip()


def test_ingest_counts_lines_with_extra_fields(config, tmp_path):
    raw = write(tmp_path / "telco.csv", HEADER + (
        "C1,Female,1,29.85,29.85,Month-to-month,DSL,No\n"
        "C2,Male,34,56.95,1889.5,One year,DSL,No,unexpected,fields\n"
    ))
    result = Ingestor(config).ingest(raw, tmp_path / "clean.csv")

    assert (result.accepted, result.rejected) == (1, 1)


def test_ingest_missing_input_raises(config, tmp_path):
    with pytest.raises(FileNotFoundError):
        Ingestor(config).ingest(tmp_path / "missing.csv", tmp_path / "clean.csv")


def test_delimiter_candidates_come_from_config(config):
    assert DataLoader(config).detect_delimiter("a|b|c\n") == "|"

    config["ingestion"]["delimiters"] = ";"
    assert DataLoader(config).detect_delimiter("a|b|c\n") == ","
