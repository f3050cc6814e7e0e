"""Cart Input Schema — boundary validation and conversion to the core document.

Invariants:
    - camelCase aliases parse, and to_document() round-trips them
    - Malformed attribute values survive parsing (the core denies them)
    - Missing merchandise survives parsing (the core denies it)
    - Models are frozen
"""

import pytest
from pydantic import ValidationError

from cc_eligibility.schemas.cart_input import RunInput
from cc_eligibility.schemas.run_result import RunResult
from tests.builders import make_group, make_input, make_line


def test_parses_full_document():
    run_input = RunInput.model_validate(make_input(
        purchasing_company={"location": {"id": "loc1", "ccLocationEligible": {"value": "true"}}},
        delivery_groups=[make_group("FedEx Home Delivery", "home")],
    ))
    assert run_input.payment_methods[0].id == "pm1"
    assert run_input.cart.buyer_identity.customer.cc_pilot_eligible.value == "true"
    location = run_input.cart.buyer_identity.purchasing_company.location
    assert location.cc_location_eligible.value == "true"
    assert run_input.cart.lines[0].merchandise.typename == "ProductVariant"
    assert run_input.cart.delivery_groups[0].selected_delivery_option.title == (
        "FedEx Home Delivery"
    )


def test_to_document_uses_host_field_names():
    doc = RunInput.model_validate(make_input()).to_document()
    assert doc["paymentMethods"] == [{"id": "pm1", "name": "Visa Credit Card"}]
    assert doc["cart"]["buyerIdentity"]["customer"] == {
        "ccPilotEligible": {"value": "true"},
    }
    assert doc["cart"]["lines"][0]["merchandise"]["__typename"] == "ProductVariant"
    assert doc["cart"]["deliveryGroups"] == []


def test_absent_optional_fields_are_dropped():
    doc = RunInput.model_validate({"cart": {"lines": [{}]}}).to_document()
    assert "paymentMethods" not in doc
    assert doc["cart"]["buyerIdentity"] == {}
    assert doc["cart"]["lines"] == [{}]


def test_non_string_attribute_value_is_kept():
    raw = make_input(customer={"ccPilotEligible": {"value": 1}})
    doc = RunInput.model_validate(raw).to_document()
    assert doc["cart"]["buyerIdentity"]["customer"]["ccPilotEligible"]["value"] == 1


def test_unknown_fields_are_ignored():
    raw = make_input(lines=[make_line()])
    raw["cart"]["cost"] = {"totalAmount": {"amount": "10.0"}}
    doc = RunInput.model_validate(raw).to_document()
    assert "cost" not in doc["cart"]


def test_payment_method_requires_id():
    with pytest.raises(ValidationError):
        RunInput.model_validate({"paymentMethods": [{"name": "Credit Card"}]})


def test_models_are_frozen():
    run_input = RunInput.model_validate(make_input())
    with pytest.raises(ValidationError):
        run_input.cart = None


def test_run_result_serializes_camel_case():
    result = RunResult.model_validate(
        {"operations": [{"paymentMethodHide": {"paymentMethodId": "pm1"}}]},
    )
    assert result.model_dump(by_alias=True) == {
        "operations": [{"paymentMethodHide": {"paymentMethodId": "pm1"}}],
    }


def test_run_result_allows_at_most_one_operation():
    op = {"paymentMethodHide": {"paymentMethodId": "pm1"}}
    with pytest.raises(ValidationError):
        RunResult.model_validate({"operations": [op, op]})
