"""Cart Payment Methods Transform — the host-facing evaluation endpoint.

Invariants:
    - Request body validated by RunInput before reaching the handler
    - The handler returns exactly what the service renders (0 or 1 operation)
    - Policy is built per request from cached Settings (cheap, no IO)
"""

from fastapi import APIRouter, Depends

from cc_eligibility.config import Settings, get_settings
from cc_eligibility.core.policy import EligibilityPolicy
from cc_eligibility.schemas.cart_input import RunInput
from cc_eligibility.schemas.run_result import RunResult
from cc_eligibility.services.payment_eligibility import (
    build_policy,
    run_cart_payment_methods_transform,
)

router = APIRouter(
    prefix="/api/v1/cart-payment-methods", tags=["payment-eligibility"],
)


def get_policy(settings: Settings = Depends(get_settings)) -> EligibilityPolicy:
    return build_policy(settings)


@router.post("/transform", response_model=RunResult, response_model_by_alias=True)
async def transform(
    body: RunInput, policy: EligibilityPolicy = Depends(get_policy),
):
    """Decide whether the credit-card payment method is hidden for this cart."""
    return run_cart_payment_methods_transform(body.to_document(), policy)
