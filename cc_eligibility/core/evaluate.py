"""Eligibility Evaluation — composes target resolution and the policy's checks into a decision.

Invariants:
    - evaluate is PURE: same input and policy always give an equal Evaluation
    - No target found → NoChange, and no check runs (empty trace)
    - Checks run strictly in policy.checks order; the first failure ends evaluation
    - A failure → HidePaymentMethod(target id); all checks passing → NoChange
    - The trace lists only checks that actually ran, in the order they ran
    - Any InputShapeError leaving evaluate carries the policy mode in its context

Design Decisions:
    - Trace returned instead of logged: the core stays free of side effects and the
      service layer owns every log line (short-circuit is observable via trace length)
    - Check dispatch through an explicit dict keyed by CheckName (no auto-discovery)
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from cc_eligibility.core.decision import NO_CHANGE, Decision, HidePaymentMethod
from cc_eligibility.core.domain_types import CheckName, PaymentMethodId, mapping_or_none
from cc_eligibility.core.enforce_customer import check_customer
from cc_eligibility.core.enforce_location import check_location
from cc_eligibility.core.enforce_parcel import check_parcel
from cc_eligibility.core.enforce_shipping import check_shipping_method
from cc_eligibility.core.errors import ErrorContext, InputShapeError
from cc_eligibility.core.policy import EligibilityPolicy
from cc_eligibility.core.resolve_target import resolve_target


CheckFn = Callable[[Mapping[str, Any], EligibilityPolicy], dict | None]


@dataclass(frozen=True)
class Evaluation:
    """Decision plus the diagnostic record of how it was reached."""
    decision: Decision
    target: Mapping[str, Any] | None = None
    trace: tuple[dict, ...] = field(default_factory=tuple)

    @property
    def failed_check(self) -> dict | None:
        for entry in self.trace:
            if not entry["passed"]:
                return entry
        return None


def _buyer_identity(cart: Mapping[str, Any]) -> Mapping[str, Any]:
    return mapping_or_none(cart.get("buyerIdentity"), "cart.buyerIdentity") or {}


_CHECKS: dict[CheckName, CheckFn] = {
    CheckName.CUSTOMER: lambda cart, policy: check_customer(
        _buyer_identity(cart).get("customer"),
    ),
    CheckName.LOCATION: lambda cart, policy: check_location(
        _buyer_identity(cart).get("purchasingCompany"),
    ),
    CheckName.PARCEL: lambda cart, policy: check_parcel(
        cart.get("lines") or [], policy,
    ),
    CheckName.SHIPPING_METHOD: lambda cart, policy: check_shipping_method(
        cart.get("deliveryGroups") or [], policy.allowed_shipping_methods,
    ),
}


def _cart_of(run_input: Mapping[str, Any], policy: EligibilityPolicy) -> Mapping[str, Any]:
    cart = run_input.get("cart")
    if cart is None:
        return {}
    if not isinstance(cart, Mapping):
        raise InputShapeError(
            "cart", "an object", ErrorContext(policy_mode=policy.mode.value),
        )
    return cart


def evaluate(run_input: Mapping[str, Any], policy: EligibilityPolicy) -> Evaluation:
    """Run the policy against one input document."""
    if not isinstance(run_input, Mapping):
        raise InputShapeError(
            "input", "an object", ErrorContext(policy_mode=policy.mode.value),
        )

    target = resolve_target(run_input.get("paymentMethods"), policy.matcher)
    if target is None:
        return Evaluation(decision=NO_CHANGE)

    target_id = target.get("id")
    if not isinstance(target_id, str) or not target_id:
        raise InputShapeError(
            "paymentMethods[].id", "a non-empty string",
            ErrorContext(policy_mode=policy.mode.value),
        )

    cart = _cart_of(run_input, policy)
    trace: list[dict] = []
    for check in policy.checks:
        try:
            violation = _CHECKS[check](cart, policy)
        except InputShapeError as exc:
            exc.context.policy_mode = policy.mode.value
            raise
        if violation:
            trace.append({**violation, "check": check.value, "passed": False})
            return Evaluation(
                decision=HidePaymentMethod(PaymentMethodId(target_id)),
                target=target,
                trace=tuple(trace),
            )
        trace.append({"check": check.value, "passed": True})

    return Evaluation(decision=NO_CHANGE, target=target, trace=tuple(trace))


def decide(run_input: Mapping[str, Any], policy: EligibilityPolicy) -> Decision:
    """Shortcut when only the decision is needed."""
    return evaluate(run_input, policy).decision
