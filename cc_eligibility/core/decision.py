"""Decisions — the engine's output sum type and its rendering to the host result document.

Invariants:
    - A decision is either NoChange or HidePaymentMethod — there is no "show" operation
    - to_run_result emits at most one operation, ever
    - NoChange renders as {"operations": []}

Design Decisions:
    - Frozen dataclasses over dicts inside the engine: decisions are compared in tests
      and must not be mutated after the evaluator returns them
"""

from dataclasses import dataclass

from cc_eligibility.core.domain_types import PaymentMethodId


@dataclass(frozen=True)
class NoChange:
    """Leave the host's payment methods untouched."""


@dataclass(frozen=True)
class HidePaymentMethod:
    """Hide exactly one payment method from checkout."""
    payment_method_id: PaymentMethodId


Decision = NoChange | HidePaymentMethod

NO_CHANGE = NoChange()


def to_run_result(decision: Decision) -> dict:
    """Render a decision as the host's `{operations: [...]}` document."""
    if isinstance(decision, HidePaymentMethod):
        return {
            "operations": [
                {"paymentMethodHide": {"paymentMethodId": decision.payment_method_id}},
            ],
        }
    return {"operations": []}
