"""Domain Types — rich types that replace bare strings across the engine.

Invariants:
    - PaymentMethodId wraps the host's opaque payment method id
    - Attribute flags are tri-state (UNSET / TRUE / OTHER), never native bools
    - Only the exact str "true" parses to FlagState.TRUE
    - All valid states encoded as Enums — no raw string matching outside this module
    - Nested objects are either absent (None) or mappings; anything else is an InputShapeError

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (trace lands in log records)
"""

from enum import Enum
from collections.abc import Mapping
from typing import Any, NewType

from cc_eligibility.core.errors import InputShapeError


# ─── Identity Types ──────────────────────────────────────────────

PaymentMethodId = NewType("PaymentMethodId", str)


# ─── Value Types ─────────────────────────────────────────────────

WeightUnits = NewType("WeightUnits", float)   # same unit as merchandise.weight (lbs)

PRODUCT_VARIANT_TYPENAME = "ProductVariant"
TRUE_FLAG_VALUE = "true"


# ─── Enums ───────────────────────────────────────────────────────

class PolicyMode(str, Enum):
    """The two policy generations. Extended is a strict superset of base."""
    BASE = "base"
    EXTENDED = "extended"


class CheckName(str, Enum):
    """Predicate checks, in their canonical priority order."""
    CUSTOMER = "customer"
    LOCATION = "location"
    PARCEL = "parcel"
    SHIPPING_METHOD = "shipping_method"


class FlagState(str, Enum):
    """Parsed state of a string-encoded boolean attribute."""
    UNSET = "unset"
    TRUE = "true"
    OTHER = "other"


def parse_flag(attribute: Any) -> FlagState:
    """Parse a `{value: "true"}` style attribute without boolean coercion.

    Missing attribute or missing value is UNSET. Anything that is not the
    exact str "true" (including "TRUE", "1", "" and native True) is OTHER.
    """
    if not isinstance(attribute, Mapping):
        return FlagState.UNSET
    value = attribute.get("value")
    if value is None:
        return FlagState.UNSET
    if isinstance(value, str) and value == TRUE_FLAG_VALUE:
        return FlagState.TRUE
    return FlagState.OTHER


def mapping_or_none(value: Any, field: str) -> Mapping[str, Any] | None:
    """Return a nested object as-is, or None when absent. Raise on any other type."""
    if value is None or isinstance(value, Mapping):
        return value
    raise InputShapeError(field, "an object")
