"""
Number formatting for reports.

Brazilian conventions: R$ 1.234,56 and 12,34%.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from config import settings
from betledger.models import to_amount

Number = Union[Decimal, float, int, str]


def _to_decimal(value: Number) -> Decimal:
    # Unparseable input renders as zero
    try:
        return to_amount(value)
    except ValueError:
        return Decimal("0.00")


def _pt_br(value: Decimal) -> str:
    """1234.5 -> 1.234,50 (absolute value)."""
    text = f"{abs(value).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(value: Number, symbol: Optional[str] = None) -> str:
    """Format an amount as currency, e.g. R$ 1.234,56 or -R$ 10,00."""
    amount = _to_decimal(value)
    symbol = symbol or settings.currency_symbol
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol} {_pt_br(amount)}"


def format_currency_with_sign(value: Number, symbol: Optional[str] = None) -> str:
    """Always signed: +R$ 50,00 or -R$ 50,00."""
    amount = _to_decimal(value)
    sign = "-" if amount < 0 else "+"
    return f"{sign}{format_currency(abs(amount), symbol)}"


def format_percentage(value: Number, signed: bool = False) -> str:
    """12.345 -> 12,35%. With signed=True positive values get a leading +."""
    amount = _to_decimal(value)
    sign = "-" if amount < 0 else ("+" if signed else "")
    return f"{sign}{_pt_br(amount)}%"
