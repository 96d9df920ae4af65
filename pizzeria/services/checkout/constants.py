"""Constants for checkout."""
from decimal import Decimal


# Delivery zones by distance from the restaurant
DELIVERY_ZONES = {
    "zone1": {"label": "0-2km", "fee": Decimal("2.00")},
    "zone2": {"label": "2-4km", "fee": Decimal("3.00")},
    "zone3": {"label": "4-6km", "fee": Decimal("3.50")},
}

PHONE_PATTERN = r"^\+49\s?[1-9]\d{1,4}\s?\d{5,10}$"
HOUSE_NUMBER_PATTERN = r"^[0-9]+[a-zA-Z]*$"
POSTCODE_PATTERN = r"^3102[0-9]$"

WHATSAPP_BASE_URL = "https://wa.me/"
