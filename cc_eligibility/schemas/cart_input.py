"""Cart Input Schema — the host's payment-methods transform input document.

Invariants:
    - All models are frozen: the input document is immutable once parsed
    - Unknown fields are ignored (the host query may grow without breaking us)
    - Attribute values accept any JSON scalar; only the core decides what "true" means
    - Optional nesting mirrors the host: customer, purchasingCompany, location,
      merchandise, product, weight and selectedDeliveryOption may all be absent
    - to_document() produces the camelCase mapping consumed by core.evaluate

Design Decisions:
    - Attribute.value typed as Any: a malformed value (number, bool) must reach the
      core and be denied there, not rejected as a 400 at the boundary
    - merchandise optional on CartLine: a missing merchandise is default-deny in core,
      so the boundary does not turn it into a validation error
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _HostModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Attribute(_HostModel):
    """String-encoded metafield value, e.g. {"value": "true"}."""
    value: Any = None


class PaymentMethod(_HostModel):
    id: str = Field(min_length=1)
    name: str | None = None


class Customer(_HostModel):
    id: str | None = None
    cc_pilot_eligible: Attribute | None = Field(None, alias="ccPilotEligible")


class CompanyLocation(_HostModel):
    id: str | None = None
    name: str | None = None
    cc_location_eligible: Attribute | None = Field(None, alias="ccLocationEligible")


class PurchasingCompany(_HostModel):
    location: CompanyLocation | None = None


class BuyerIdentity(_HostModel):
    customer: Customer | None = None
    purchasing_company: PurchasingCompany | None = Field(None, alias="purchasingCompany")


class Product(_HostModel):
    id: str | None = None
    requires_ltl: Attribute | None = Field(None, alias="requiresLtl")
    is_parcel_eligible: Attribute | None = Field(None, alias="isParcelEligible")


class Merchandise(_HostModel):
    typename: str | None = Field(None, alias="__typename")
    weight: float | None = None
    product: Product | None = None


class CartLine(_HostModel):
    merchandise: Merchandise | None = None


class DeliveryOption(_HostModel):
    title: str | None = None
    handle: str | None = None


class DeliveryGroup(_HostModel):
    selected_delivery_option: DeliveryOption | None = Field(
        None, alias="selectedDeliveryOption",
    )


class Cart(_HostModel):
    buyer_identity: BuyerIdentity = Field(
        default_factory=BuyerIdentity, alias="buyerIdentity",
    )
    lines: list[CartLine] = Field(default_factory=list)
    delivery_groups: list[DeliveryGroup] = Field(
        default_factory=list, alias="deliveryGroups",
    )


class RunInput(_HostModel):
    """Full transform input: available payment methods plus the cart snapshot."""
    payment_methods: list[PaymentMethod] | None = Field(None, alias="paymentMethods")
    cart: Cart = Field(default_factory=Cart)

    def to_document(self) -> dict:
        """Camel-cased plain mapping for the pure core."""
        return self.model_dump(by_alias=True, exclude_none=True)
