"""Checkout models."""
import re
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from pizzeria.services.checkout.constants import (
    DELIVERY_ZONES,
    HOUSE_NUMBER_PATTERN,
    PHONE_PATTERN,
    POSTCODE_PATTERN,
)


class OrderType(str, Enum):
    """Pickup or delivery."""

    PICKUP = "pickup"
    DELIVERY = "delivery"

    def __str__(self) -> str:
        return self.value


class DeliveryTime(str, Enum):
    """As soon as possible or at a chosen time."""

    ASAP = "asap"
    SPECIFIC = "specific"

    def __str__(self) -> str:
        return self.value


class CheckoutRequest(BaseModel):
    """Customer details submitted with the order form."""

    order_type: OrderType = OrderType.PICKUP
    delivery_zone: Optional[str] = None
    delivery_time: DeliveryTime = DeliveryTime.ASAP
    specific_time: Optional[str] = None
    name: str = Field(min_length=2, max_length=50)
    phone: str = Field(min_length=10, max_length=16)
    street: Optional[str] = None
    house_number: Optional[str] = None
    postcode: Optional[str] = None
    note: Optional[str] = Field(default=None, max_length=500)

    @field_validator("phone")
    @classmethod
    def _german_phone(cls, value: str) -> str:
        if not re.match(PHONE_PATTERN, value):
            raise ValueError("Gültige deutsche Telefonnummer eingeben (+49 Format)")
        return value

    @field_validator("delivery_zone")
    @classmethod
    def _known_zone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in DELIVERY_ZONES:
            raise ValueError("Unbekannte Lieferzone")
        return value

    @model_validator(mode="after")
    def _check_delivery_details(self) -> "CheckoutRequest":
        if self.delivery_time is DeliveryTime.SPECIFIC and not self.specific_time:
            raise ValueError("Bitte wählen Sie eine Uhrzeit")

        if self.order_type is OrderType.DELIVERY:
            if not self.delivery_zone:
                raise ValueError("Bitte wählen Sie eine Lieferzone")
            if not self.street or len(self.street) < 3:
                raise ValueError("Straße ist bei Lieferung erforderlich")
            if not self.house_number or not re.match(HOUSE_NUMBER_PATTERN, self.house_number):
                raise ValueError("Gültige Hausnummer eingeben (z.B. 123 oder 123a)")
            if not self.postcode or not re.match(POSTCODE_PATTERN, self.postcode):
                raise ValueError("Postleitzahl muss mit 3102 beginnen")
        return self


class OrderTotals(BaseModel):
    """Order totals."""

    subtotal: Decimal
    delivery_fee: Decimal = Decimal("0")
    total: Decimal
