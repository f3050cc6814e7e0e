"""Target Resolution — finds the credit-card payment method among the host's methods.

Invariants:
    - resolve_target is PURE: returns the matching method mapping or None
    - Matching is case-insensitive substring matching on the display name
    - Exclude list is checked BEFORE include list for every candidate
    - ALWAYS_EXCLUDED ("gift") applies to every matcher, whatever its own exclude list says
    - First match in input order wins; later matches are never targeted
    - Absent method list is a valid "no methods" signal, not an error

Design Decisions:
    - Name matching ties to display text; the include/exclude lists live in
      PaymentMethodMatcher as data so policies can swap them without code changes
    - First-match over "reject ambiguity": two matching methods is an accepted
      ambiguity of the host configuration, not something the engine repairs
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from cc_eligibility.core.errors import InputShapeError


# Gift cards contain "card" too; they must never be targeted
ALWAYS_EXCLUDED: tuple[str, ...] = ("gift",)


@dataclass(frozen=True)
class PaymentMethodMatcher:
    """Include/exclude substring lists for recognising the targeted method."""

    include: tuple[str, ...]
    exclude: tuple[str, ...] = ALWAYS_EXCLUDED

    def matches(self, name: Any) -> bool:
        if not isinstance(name, str) or not name:
            return False
        name_lower = name.lower()
        if any(term.lower() in name_lower for term in (*ALWAYS_EXCLUDED, *self.exclude)):
            return False
        return any(term.lower() in name_lower for term in self.include)


def resolve_target(
    payment_methods: Sequence[Mapping[str, Any]] | None,
    matcher: PaymentMethodMatcher,
) -> Mapping[str, Any] | None:
    """Return the first payment method whose name matches, or None."""
    if payment_methods is None:
        return None
    if not isinstance(payment_methods, Sequence) or isinstance(payment_methods, str):
        raise InputShapeError("paymentMethods", "a list")

    for method in payment_methods:
        if not isinstance(method, Mapping):
            raise InputShapeError("paymentMethods[]", "an object")
        if matcher.matches(method.get("name")):
            return method
    return None
