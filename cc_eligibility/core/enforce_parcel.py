"""Parcel Eligibility — every cart line must ship as a standard parcel (not LTL freight).

Invariants:
    - check_parcel is PURE: returns the first line violation, None when every line passes
    - Empty or absent cart passes (nothing to disqualify)
    - Lines are evaluated in input order; evaluation stops at the first disqualifying line
    - Per-line priority: merchandise kind → policy path (flags or weight presence) → threshold
    - A weight exactly equal to the threshold passes

Design Decisions:
    - Missing merchandise or product is default-deny in both modes (not an exception):
      the host schema marks them required, so absence is treated like an unknown item
    - Present-but-malformed objects (line, merchandise, product) raise InputShapeError
      with the line index in the field path
    - BASE trusts explicit product flags and tolerates missing weight;
      EXTENDED ignores flags and requires a positive weight
"""

import math
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any

from cc_eligibility.core.domain_types import (
    CheckName,
    FlagState,
    PolicyMode,
    PRODUCT_VARIANT_TYPENAME,
    mapping_or_none,
    parse_flag,
)
from cc_eligibility.core.errors import InputShapeError
from cc_eligibility.core.policy import EligibilityPolicy


def _violation(reason_code: str, message: str, line_index: int) -> dict:
    return {
        "status": "failed",
        "check": CheckName.PARCEL.value,
        "reason_code": reason_code,
        "message": message,
        "line_index": line_index,
    }


def _is_usable_weight(weight: Any) -> bool:
    if isinstance(weight, bool) or not isinstance(weight, Real):
        return False
    return not math.isnan(weight) and weight >= 0


def _check_flags(product: Mapping[str, Any], product_id: Any, index: int) -> dict | None:
    if parse_flag(product.get("requiresLtl")) is FlagState.TRUE:
        return _violation(
            "REQUIRES_LTL",
            f"Product {product_id} requires LTL freight",
            index,
        )
    parcel_flag = parse_flag(product.get("isParcelEligible"))
    if parcel_flag is FlagState.OTHER:
        return _violation(
            "NOT_PARCEL_ELIGIBLE",
            f"Product {product_id} is flagged as not parcel eligible",
            index,
        )
    return None


def check_line(line: Mapping[str, Any], policy: EligibilityPolicy, index: int = 0) -> dict | None:
    """Evaluate one cart line against the policy's parcel rule."""
    line = mapping_or_none(line, f"cart.lines[{index}]") or {}
    merchandise = mapping_or_none(
        line.get("merchandise"), f"cart.lines[{index}].merchandise",
    )
    if merchandise is None:
        return _violation("MISSING_MERCHANDISE", "Cart line has no merchandise", index)

    typename = merchandise.get("__typename")
    if typename != PRODUCT_VARIANT_TYPENAME:
        return _violation(
            "NOT_PRODUCT_VARIANT",
            f"Non-product variant found: {typename}",
            index,
        )

    product = mapping_or_none(
        merchandise.get("product"), f"cart.lines[{index}].merchandise.product",
    )
    if product is None:
        return _violation("MISSING_PRODUCT", "Product variant has no product", index)

    product_id = product.get("id")
    weight = merchandise.get("weight")

    if policy.mode is PolicyMode.BASE:
        flag_error = _check_flags(product, product_id, index)
        if flag_error:
            return flag_error
        if weight is None:
            return None
    elif weight is None or weight == 0:
        return _violation(
            "MISSING_WEIGHT",
            f"Product {product_id} has no weight",
            index,
        )

    if not _is_usable_weight(weight):
        return _violation(
            "MALFORMED_WEIGHT",
            f"Product {product_id} has unusable weight {weight!r}",
            index,
        )

    if weight > policy.parcel_weight_threshold:
        return _violation(
            "OVER_WEIGHT_LIMIT",
            f"Product {product_id} exceeds weight limit: {weight} > "
            f"{policy.parcel_weight_threshold:g}",
            index,
        )
    return None


def check_parcel(
    lines: Sequence[Mapping[str, Any]] | None, policy: EligibilityPolicy,
) -> dict | None:
    """All lines must be parcel eligible. Returns first violation or None."""
    if not lines:
        return None
    if not isinstance(lines, Sequence) or isinstance(lines, str):
        raise InputShapeError("cart.lines", "a list")

    for index, line in enumerate(lines):
        error = check_line(line, policy, index)
        if error:
            return error
    return None


def is_cart_parcel_eligible(
    lines: Sequence[Mapping[str, Any]] | None, policy: EligibilityPolicy,
) -> bool:
    return check_parcel(lines, policy) is None
