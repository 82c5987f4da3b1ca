from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from splitledger.services.money import Number, to_decimal

# Same symbols an en-US browser shows for these codes; anything else gets the code.
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "KRW": "₩",
    "CNY": "CN¥",
    "CAD": "CA$",
    "AUD": "A$",
}
ZERO_DECIMAL_CURRENCIES = {"JPY", "KRW"}


def format_currency(amount: Number, currency: str = "USD") -> str:
    code = currency.upper()
    digits = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    value = to_decimal(amount).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.{digits}f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {body}"
    return f"{sign}{symbol}{body}"


def format_signed(amount: Number, currency: str = "USD") -> str:
    value = to_decimal(amount)
    sign = "+" if value > 0 else ""
    return f"{sign}{format_currency(value, currency)}"


def member_label(m: Any) -> str:
    name = getattr(m, "display_name", None)
    if name:
        return name
    email = getattr(m, "email", None)
    if email:
        return email
    return str(m.id)
