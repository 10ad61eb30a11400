# turfbook/services/slots/pricing.py
"""
Price display and cart totals.
"""

from typing import Any

from ..records import as_number, get_field, is_sequence

CURRENCY_SYMBOL = "₹"


def format_price(amount: Any) -> str:
    """
    Rupee amount without decimals, Indian digit grouping.

        format_price(1500)    -> "₹1,500"
        format_price(1234567) -> "₹12,34,567"
        format_price(None)    -> "₹0"
    """
    value = as_number(amount)
    if not value:
        return f"{CURRENCY_SYMBOL}0"

    sign = "-" if value < 0 else ""
    digits = str(int(round(abs(value))))

    # Last three digits, then groups of two
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ",".join(groups + [tail])

    return f"{sign}{CURRENCY_SYMBOL}{grouped}"


def cart_total(items: Any) -> float:
    """
    Sum of price × quantity × duration over cart items.

    Missing quantity / duration count as 1, missing price as 0.
    Non-list input totals 0.
    """
    if not is_sequence(items):
        return 0

    total = 0
    for item in items:
        price = as_number(get_field(item, "price"))
        quantity = as_number(get_field(item, "quantity"), default=1) or 1
        duration = as_number(get_field(item, "duration"), default=1) or 1
        total += price * quantity * duration
    return total
