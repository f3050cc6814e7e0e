"""Shipping Method Eligibility — selected delivery options must be on the allow-list.

Invariants:
    - check_shipping_method is PURE: returns violation dict on failure, None on success
    - No delivery groups, or a group with nothing selected yet, never blocks
    - Every selected option must match: AND across groups, OR across allow-list entries
    - Title and handle are lowercased; either containing an allowed fragment is a match
    - Groups are evaluated in input order; first failing group ends the check

Design Decisions:
    - Checked last: the shipping selection is the most volatile piece of cart state
    - Matches on title OR handle, not title alone: a handle match by itself is sufficient
    - A group or selected option that is present but not an object raises InputShapeError
"""

from collections.abc import Mapping, Sequence
from typing import Any

from cc_eligibility.core.domain_types import CheckName, mapping_or_none
from cc_eligibility.core.errors import InputShapeError


def _lower(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def check_shipping_method(
    delivery_groups: Sequence[Mapping[str, Any]] | None,
    allowed_methods: Sequence[str],
) -> dict | None:
    """Every selected delivery option must match an allowed method fragment."""
    if not delivery_groups:
        return None
    if not isinstance(delivery_groups, Sequence) or isinstance(delivery_groups, str):
        raise InputShapeError("cart.deliveryGroups", "a list")

    for index, group in enumerate(delivery_groups):
        group = mapping_or_none(group, f"cart.deliveryGroups[{index}]") or {}
        selected = mapping_or_none(
            group.get("selectedDeliveryOption"),
            f"cart.deliveryGroups[{index}].selectedDeliveryOption",
        )
        if selected is None:
            continue

        title = _lower(selected.get("title"))
        handle = _lower(selected.get("handle"))
        if not any(m in title or m in handle for m in allowed_methods):
            return {
                "status": "failed",
                "check": CheckName.SHIPPING_METHOD.value,
                "reason_code": "SHIPPING_METHOD_NOT_ELIGIBLE",
                "message": (
                    f"Shipping method {selected.get('title')!r} "
                    f"(handle: {selected.get('handle')}) not eligible"
                ),
                "group_index": index,
            }
    return None


def is_shipping_method_eligible(
    delivery_groups: Sequence[Mapping[str, Any]] | None,
    allowed_methods: Sequence[str],
) -> bool:
    return check_shipping_method(delivery_groups, allowed_methods) is None
