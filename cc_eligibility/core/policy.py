"""Eligibility Policies — the two named policy generations and their overrides.

Invariants:
    - BASE_POLICY runs CUSTOMER, PARCEL; EXTENDED_POLICY runs CUSTOMER, LOCATION, PARCEL, SHIPPING_METHOD
    - Check order inside a policy is always the canonical CheckName order
    - PARCEL_WEIGHT_THRESHOLD (150) is the single source of truth for the default cutoff
    - policy_for_mode never returns a policy with a non-finite or non-positive threshold,
      or an empty include list
    - An exclude override is merged with ALWAYS_EXCLUDED, never replaces it

Design Decisions:
    - Frozen dataclass over dict: policies are shared module constants and must not be mutated
    - The two generations differ in missing-weight handling, so they are kept as
      separate named modes rather than merged
"""

import math
from dataclasses import dataclass, replace

from cc_eligibility.core.domain_types import CheckName, PolicyMode
from cc_eligibility.core.errors import (
    ErrorContext,
    PolicyConfigurationError,
    UnknownPolicyModeError,
)
from cc_eligibility.core.resolve_target import ALWAYS_EXCLUDED, PaymentMethodMatcher


PARCEL_WEIGHT_THRESHOLD: float = 150.0
ALLOWED_SHIPPING_METHODS: tuple[str, ...] = ("home delivery", "express saver")


@dataclass(frozen=True)
class EligibilityPolicy:
    """Everything the evaluator needs to know about one policy generation."""

    mode: PolicyMode
    matcher: PaymentMethodMatcher
    checks: tuple[CheckName, ...]
    parcel_weight_threshold: float = PARCEL_WEIGHT_THRESHOLD
    allowed_shipping_methods: tuple[str, ...] = ALLOWED_SHIPPING_METHODS


BASE_POLICY = EligibilityPolicy(
    mode=PolicyMode.BASE,
    matcher=PaymentMethodMatcher(
        include=("credit", "card", "visa", "mastercard"),
        exclude=("gift",),
    ),
    checks=(CheckName.CUSTOMER, CheckName.PARCEL),
)

EXTENDED_POLICY = EligibilityPolicy(
    mode=PolicyMode.EXTENDED,
    # "bogus" is the sandbox gateway name used in development stores
    matcher=PaymentMethodMatcher(
        include=("credit", "bogus", "stripe"),
        exclude=("gift",),
    ),
    checks=(
        CheckName.CUSTOMER,
        CheckName.LOCATION,
        CheckName.PARCEL,
        CheckName.SHIPPING_METHOD,
    ),
)

_POLICIES: dict[PolicyMode, EligibilityPolicy] = {
    PolicyMode.BASE: BASE_POLICY,
    PolicyMode.EXTENDED: EXTENDED_POLICY,
}


def _clean_terms(terms: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    return tuple(t.strip().lower() for t in terms if t and t.strip())


def _merge_always_excluded(terms: tuple[str, ...]) -> tuple[str, ...]:
    return ALWAYS_EXCLUDED + tuple(t for t in terms if t not in ALWAYS_EXCLUDED)


def policy_for_mode(
    mode: PolicyMode | str,
    *,
    parcel_weight_threshold: float | None = None,
    target_include: list[str] | tuple[str, ...] | None = None,
    target_exclude: list[str] | tuple[str, ...] | None = None,
    allowed_shipping_methods: list[str] | tuple[str, ...] | None = None,
) -> EligibilityPolicy:
    """Return the named policy with any overrides applied."""
    try:
        policy = _POLICIES[PolicyMode(mode)]
    except ValueError:
        raise UnknownPolicyModeError(str(mode)) from None

    ctx = ErrorContext(policy_mode=policy.mode.value)

    if parcel_weight_threshold is not None:
        if not math.isfinite(parcel_weight_threshold) or parcel_weight_threshold <= 0:
            raise PolicyConfigurationError(
                "parcel_weight_threshold", "must be a finite number greater than zero", ctx,
            )
        policy = replace(policy, parcel_weight_threshold=float(parcel_weight_threshold))

    if target_include is not None or target_exclude is not None:
        include = (
            _clean_terms(target_include)
            if target_include is not None else policy.matcher.include
        )
        exclude = (
            _merge_always_excluded(_clean_terms(target_exclude))
            if target_exclude is not None else policy.matcher.exclude
        )
        if not include:
            raise PolicyConfigurationError(
                "target_include", "at least one name fragment is required", ctx,
            )
        policy = replace(policy, matcher=PaymentMethodMatcher(include, exclude))

    if allowed_shipping_methods is not None:
        allowed = _clean_terms(allowed_shipping_methods)
        if not allowed:
            raise PolicyConfigurationError(
                "allowed_shipping_methods", "at least one method is required", ctx,
            )
        policy = replace(policy, allowed_shipping_methods=allowed)

    return policy
