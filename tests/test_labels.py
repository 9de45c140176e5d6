import pickle

import numpy as np
import pytest

from telco_churn.features.labels import (
    CHURN_CONTRACT,
    LabelDerivation,
    churn_to_bool,
    get_label_transform,
    register_label_transform,
)


@pytest.mark.parametrize("label", ["Yes", "yes", "YES please", "Y", "y", "  yes  "])
def test_churn_to_bool_true(label):
    assert churn_to_bool(label) is True


@pytest.mark.parametrize("label", ["No", "", "   ", "Maybe", "1", "0", None, "no, yes"])
def test_churn_to_bool_false(label):
    assert churn_to_bool(label) is False


def test_contract_resolves_to_churn_to_bool():
    assert get_label_transform(CHURN_CONTRACT) is churn_to_bool


def test_unknown_contract_raises():
    with pytest.raises(KeyError, match="NotRegistered"):
        get_label_transform("NotRegistered")


def test_register_conflicting_transform_raises():
    with pytest.raises(ValueError):
        register_label_transform(CHURN_CONTRACT, lambda label: True)


def test_label_derivation_transform():
    derivation = LabelDerivation().fit(["Yes", "No"])
    result = derivation.transform(["Yes", "No", "yes", "Maybe", ""])
    np.testing.assert_array_equal(result, [True, False, True, False, False])
    assert result.dtype == bool


def test_label_derivation_pickles_by_name():
    restored = pickle.loads(pickle.dumps(LabelDerivation(CHURN_CONTRACT)))
    assert restored.contract_name == CHURN_CONTRACT
    assert restored.transform(["Y"]).tolist() == [True]
