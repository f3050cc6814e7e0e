"""Run Result Schema — the transform output document returned to the host.

Invariants:
    - operations holds zero or one PaymentMethodHideOperation
    - Serialized with camelCase aliases (paymentMethodHide, paymentMethodId)
"""

from pydantic import BaseModel, ConfigDict, Field


class PaymentMethodHide(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_method_id: str = Field(alias="paymentMethodId")


class Operation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    payment_method_hide: PaymentMethodHide = Field(alias="paymentMethodHide")


class RunResult(BaseModel):
    operations: list[Operation] = Field(default_factory=list, max_length=1)
