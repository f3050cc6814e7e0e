"""Location Eligibility — B2B company locations must be flagged for credit cards.

Invariants:
    - check_location is PURE: returns violation dict on failure, None on success
    - No purchasing company means a B2C checkout: automatic pass
    - Purchasing company without a location fails
    - Location flag uses the same strict "true" contract as the customer flag
    - Company or location present but not an object raises InputShapeError

Design Decisions:
    - Asymmetric defaults are deliberate: the customer flag denies on absence,
      the company context passes on absence (it only exists for B2B carts)
"""

from collections.abc import Mapping
from typing import Any

from cc_eligibility.core.domain_types import (
    CheckName,
    FlagState,
    mapping_or_none,
    parse_flag,
)


def _describe_location(location: Mapping[str, Any]) -> str:
    name = location.get("name") or "<unnamed>"
    location_id = location.get("id")
    return f"{name} ({location_id})" if location_id else str(name)


def check_location(purchasing_company: Mapping[str, Any] | None) -> dict | None:
    """B2B location must carry ccLocationEligible == "true"; B2C passes."""
    purchasing_company = mapping_or_none(
        purchasing_company, "cart.buyerIdentity.purchasingCompany",
    )
    if purchasing_company is None:
        return None

    location = mapping_or_none(
        purchasing_company.get("location"),
        "cart.buyerIdentity.purchasingCompany.location",
    )
    if location is None:
        return {
            "status": "failed",
            "check": CheckName.LOCATION.value,
            "reason_code": "NO_COMPANY_LOCATION",
            "message": "No location found for B2B purchasing company",
        }

    attribute = location.get("ccLocationEligible")
    if parse_flag(attribute) is not FlagState.TRUE:
        raw = attribute.get("value") if isinstance(attribute, Mapping) else None
        return {
            "status": "failed",
            "check": CheckName.LOCATION.value,
            "reason_code": "LOCATION_NOT_ELIGIBLE",
            "message": f"Location {_describe_location(location)} not eligible: {raw!r}",
        }
    return None


def is_location_eligible(purchasing_company: Mapping[str, Any] | None) -> bool:
    return check_location(purchasing_company) is None
