"""Payment Eligibility Service — runs the pure evaluator and reports what happened.

Invariants:
    - build_policy maps Settings to exactly one EligibilityPolicy (or raises a config error)
    - run_cart_payment_methods_transform returns the host result document unchanged from core
    - One log line per check that ran; checks skipped by short-circuit produce no lines
    - Logging never influences the returned document

Design Decisions:
    - Impureim sandwich: parse (schemas) → decide (core) → log + render (here)
    - Full input logged at DEBUG only: carts carry customer identifiers
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from cc_eligibility.config import Settings
from cc_eligibility.core.decision import HidePaymentMethod, to_run_result
from cc_eligibility.core.evaluate import Evaluation, evaluate
from cc_eligibility.core.policy import EligibilityPolicy, policy_for_mode

logger = logging.getLogger(__name__)


def build_policy(settings: Settings) -> EligibilityPolicy:
    """Build the configured policy. Raises UnknownPolicyModeError / PolicyConfigurationError."""
    return policy_for_mode(
        settings.policy_mode,
        parcel_weight_threshold=settings.parcel_weight_threshold,
        target_include=settings.target_include,
        target_exclude=settings.target_exclude,
        allowed_shipping_methods=settings.allowed_shipping_methods,
    )


def _log_evaluation(evaluation: Evaluation, policy: EligibilityPolicy) -> None:
    mode = policy.mode.value
    if evaluation.target is None:
        logger.info(
            "No credit card payment method found",
            extra={"policy_mode": mode, "decision": "no_change"},
        )
        return

    target_id = evaluation.target.get("id")
    for entry in evaluation.trace:
        if entry["passed"]:
            logger.info(
                f"Check {entry['check']} passed",
                extra={"policy_mode": mode, "check": entry["check"], "passed": True},
            )
        else:
            logger.info(
                f"Check {entry['check']} failed: {entry['message']}",
                extra={
                    "policy_mode": mode,
                    "check": entry["check"],
                    "passed": False,
                    "reason_code": entry["reason_code"],
                    "payment_method_id": target_id,
                },
            )

    if isinstance(evaluation.decision, HidePaymentMethod):
        logger.info(
            f"Hiding payment method {target_id}",
            extra={
                "policy_mode": mode,
                "decision": "hide",
                "payment_method_id": target_id,
            },
        )
    else:
        logger.info(
            "All eligibility checks passed",
            extra={
                "policy_mode": mode,
                "decision": "no_change",
                "payment_method_id": target_id,
            },
        )


def run_cart_payment_methods_transform(
    run_input: Mapping[str, Any], policy: EligibilityPolicy,
) -> dict:
    """Evaluate one cart and return the host's `{operations: [...]}` document."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Transform input: {json.dumps(run_input, default=str)}")

    evaluation = evaluate(run_input, policy)
    _log_evaluation(evaluation, policy)
    return to_run_result(evaluation.decision)
