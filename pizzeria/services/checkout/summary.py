"""Order totals and the order message sent to the restaurant."""
from decimal import Decimal
from typing import List, Optional
from urllib.parse import quote

from pizzeria.services.cart.models import OrderLine
from pizzeria.services.checkout.constants import DELIVERY_ZONES, WHATSAPP_BASE_URL
from pizzeria.services.checkout.models import (
    CheckoutRequest,
    DeliveryTime,
    OrderTotals,
    OrderType,
)
from pizzeria.services.ordering.pricing import format_price


def delivery_fee(order_type: OrderType, delivery_zone: Optional[str]) -> Decimal:
    """Get the delivery fee for an order type and zone."""
    if order_type is OrderType.DELIVERY and delivery_zone in DELIVERY_ZONES:
        return DELIVERY_ZONES[delivery_zone]["fee"]
    return Decimal("0")


def calculate_totals(
    lines: List[OrderLine],
    order_type: OrderType = OrderType.PICKUP,
    delivery_zone: Optional[str] = None,
) -> OrderTotals:
    """Calculate subtotal, delivery fee and total for cart lines."""
    subtotal = sum((line.line_total for line in lines), Decimal("0"))
    fee = delivery_fee(order_type, delivery_zone)
    return OrderTotals(subtotal=subtotal, delivery_fee=fee, total=subtotal + fee)


def describe_line(line: OrderLine) -> str:
    """One line of the order listing."""
    text = f"{line.quantity}x Nr. {line.item.number} {line.item.name}"
    if line.size:
        size_desc = f" - {line.size.description}" if line.size.description else ""
        text += f" ({line.size.name}{size_desc})"
    if line.pizza_style:
        text += f" - Art: {line.pizza_style}"
    if line.pasta_type:
        text += f" - Nudelsorte: {line.pasta_type}"
    if line.sauce:
        if line.item.is_beer_selection:
            label = "Bier"
        elif line.item.is_salad:
            label = "Dressing"
        else:
            label = "Soße"
        text += f" - {label}: {line.sauce}"
    if line.fries_option:
        text += f" - Beilage: {line.fries_option}"
    if line.ingredients:
        text += f" - Zutaten: {', '.join(line.ingredients)}"
    if line.extras:
        text += f" - Extras: {', '.join(line.extras)} (+{format_price(line.extras_surcharge)})"
    return text


def build_order_message(
    request: CheckoutRequest,
    lines: List[OrderLine],
    totals: OrderTotals,
) -> str:
    """Build the order text sent to the restaurant."""
    if request.delivery_time is DeliveryTime.ASAP:
        time_info = "So schnell wie möglich"
    else:
        time_info = f"Um {request.specific_time} Uhr"
    is_pickup = request.order_type is OrderType.PICKUP

    parts = [
        f"Neue Bestellung von {request.name}",
        "",
        f"Telefon: {request.phone}",
        "",
        f"Bestellart: {'Abholung' if is_pickup else 'Lieferung'}",
        f"Lieferzeit: {time_info}",
        "",
    ]
    if not is_pickup:
        parts += [
            "Lieferadresse:",
            f"   {request.street} {request.house_number}",
            f"   {request.postcode}",
            "",
        ]

    parts.append("Bestellung:")
    parts += [describe_line(line) for line in lines]
    parts += ["", f"Zwischensumme: {format_price(totals.subtotal)}"]

    if not is_pickup and request.delivery_zone:
        zone = DELIVERY_ZONES[request.delivery_zone]
        parts.append(f"Lieferkosten ({zone['label']}): {format_price(zone['fee'])}")

    parts.append(f"Gesamtbetrag: {format_price(totals.total)}")
    if request.note:
        parts += ["", f"Anmerkung: {request.note}"]
    return "\n".join(parts)


def whatsapp_url(phone_number: str, message: str) -> str:
    """Link that opens a WhatsApp chat with the message prefilled."""
    return f"{WHATSAPP_BASE_URL}{phone_number}?text={quote(message)}"
