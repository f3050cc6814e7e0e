"""Payment Eligibility Service — policy building and trace logging around the core.

Tests cover:
    - build_policy maps Settings fields onto the named policy
    - Output document matches the core decision
    - One log line per check that ran; skipped checks never log
    - Logging level does not change the result
"""

import logging

import pytest

from cc_eligibility.config import Settings
from cc_eligibility.core.domain_types import PolicyMode
from cc_eligibility.core.errors import PolicyConfigurationError
from cc_eligibility.core.policy import EXTENDED_POLICY
from cc_eligibility.services.payment_eligibility import (
    build_policy,
    run_cart_payment_methods_transform,
)
from tests.builders import make_group, make_input, make_line


LOGGER = "cc_eligibility.services.payment_eligibility"


def _check_records(caplog):
    return [r for r in caplog.records if getattr(r, "check", None)]


# ─── build_policy ────────────────────────────────────────────────

def test_build_policy_defaults_to_extended():
    policy = build_policy(Settings(_env_file=None))
    assert policy.mode is PolicyMode.EXTENDED
    assert policy.parcel_weight_threshold == 150


def test_build_policy_applies_overrides():
    settings = Settings(
        _env_file=None,
        policy_mode="BASE",
        parcel_weight_threshold=80,
        allowed_shipping_methods=["ground"],
    )
    policy = build_policy(settings)
    assert policy.mode is PolicyMode.BASE
    assert policy.parcel_weight_threshold == 80.0
    assert policy.allowed_shipping_methods == ("ground",)


def test_build_policy_rejects_bad_threshold():
    with pytest.raises(PolicyConfigurationError):
        build_policy(Settings(_env_file=None, parcel_weight_threshold=0))


def test_build_policy_rejects_nan_threshold_from_env(monkeypatch):
    monkeypatch.setenv("PARCEL_WEIGHT_THRESHOLD", "nan")
    settings = Settings(_env_file=None)
    with pytest.raises(PolicyConfigurationError) as exc:
        build_policy(settings)
    assert exc.value.setting == "parcel_weight_threshold"


# ─── run_cart_payment_methods_transform ──────────────────────────

def test_eligible_cart_returns_no_operations(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    run_input = make_input(delivery_groups=[make_group("FedEx Express Saver", "saver")])
    result = run_cart_payment_methods_transform(run_input, EXTENDED_POLICY)
    assert result == {"operations": []}
    assert [r.check for r in _check_records(caplog)] == [
        "customer", "location", "parcel", "shipping_method",
    ]
    assert caplog.records[-1].decision == "no_change"


def test_short_circuit_logs_only_checks_that_ran(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    run_input = make_input(customer=None, lines=[make_line(weight=900)])
    result = run_cart_payment_methods_transform(run_input, EXTENDED_POLICY)
    assert result == {
        "operations": [{"paymentMethodHide": {"paymentMethodId": "pm1"}}],
    }
    records = _check_records(caplog)
    assert len(records) == 1
    assert records[0].reason_code == "NO_CUSTOMER"
    assert records[0].payment_method_id == "pm1"


def test_no_target_logs_single_line(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER)
    run_input = make_input(payment_methods=[{"id": "cod", "name": "Cash on Delivery"}])
    assert run_cart_payment_methods_transform(run_input, EXTENDED_POLICY) == {
        "operations": [],
    }
    assert _check_records(caplog) == []
    assert len(caplog.records) == 1


def test_debug_logging_does_not_change_result(caplog):
    run_input = make_input(lines=[make_line(weight=151)])
    quiet = run_cart_payment_methods_transform(run_input, EXTENDED_POLICY)
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    verbose = run_cart_payment_methods_transform(run_input, EXTENDED_POLICY)
    assert quiet == verbose
    assert any("Transform input" in r.getMessage() for r in caplog.records)
