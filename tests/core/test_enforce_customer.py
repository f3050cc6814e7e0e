"""Customer Eligibility — tests for the pilot-enrolment check.

Tests cover:
    - Absent customer fails with NO_CUSTOMER
    - Absent attribute / non-"true" values fail with CUSTOMER_NOT_PILOT_ELIGIBLE
    - Exact "true" passes
    - Customer present but not an object raises InputShapeError
"""

import pytest

from cc_eligibility.core.enforce_customer import check_customer, is_customer_eligible
from cc_eligibility.core.errors import InputShapeError


def test_absent_customer_fails():
    error = check_customer(None)
    assert error is not None
    assert error["reason_code"] == "NO_CUSTOMER"
    assert error["check"] == "customer"


def test_customer_without_attribute_fails():
    error = check_customer({"id": "c1"})
    assert error is not None
    assert error["reason_code"] == "CUSTOMER_NOT_PILOT_ELIGIBLE"


@pytest.mark.parametrize("value", ["TRUE", "1", "", "false", 1, True])
def test_non_true_values_fail(value):
    assert not is_customer_eligible({"ccPilotEligible": {"value": value}})


def test_exact_true_passes():
    assert check_customer({"ccPilotEligible": {"value": "true"}}) is None
    assert is_customer_eligible({"ccPilotEligible": {"value": "true"}})


@pytest.mark.parametrize("customer", ["abc", 42, ["c1"]])
def test_malformed_customer_raises_input_shape_error(customer):
    with pytest.raises(InputShapeError) as exc:
        check_customer(customer)
    assert exc.value.field == "cart.buyerIdentity.customer"
