"""Customer Eligibility — the buyer must be enrolled in the credit-card pilot.

Invariants:
    - check_customer is PURE: returns violation dict on failure, None on success
    - Absent customer, absent attribute, or any value other than the exact str
      "true" all fail (no implicit default-allow)
    - No case normalisation, no boolean coercion
    - A customer that is present but not an object raises InputShapeError

Design Decisions:
    - Checked first: customer identity is the cheapest and most authoritative signal
"""

from collections.abc import Mapping
from typing import Any

from cc_eligibility.core.domain_types import (
    CheckName,
    FlagState,
    mapping_or_none,
    parse_flag,
)


def check_customer(customer: Mapping[str, Any] | None) -> dict | None:
    """Customer must carry ccPilotEligible == "true"."""
    customer = mapping_or_none(customer, "cart.buyerIdentity.customer")
    if customer is None:
        return {
            "status": "failed",
            "check": CheckName.CUSTOMER.value,
            "reason_code": "NO_CUSTOMER",
            "message": "No customer found on buyer identity",
        }

    attribute = customer.get("ccPilotEligible")
    if parse_flag(attribute) is not FlagState.TRUE:
        raw = attribute.get("value") if isinstance(attribute, Mapping) else None
        return {
            "status": "failed",
            "check": CheckName.CUSTOMER.value,
            "reason_code": "CUSTOMER_NOT_PILOT_ELIGIBLE",
            "message": f"Customer not pilot eligible: {raw!r}",
        }
    return None


def is_customer_eligible(customer: Mapping[str, Any] | None) -> bool:
    return check_customer(customer) is None
