"""Money and date formatting shared by prompts and local answers."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def format_money(amount: Decimal, symbol: str = "R$") -> str:
    """Format an amount as "R$ 1,234.50" (negative as "-R$ 12.00")."""
    quantized = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol} {abs(quantized):,.2f}"


def format_percent(value: Decimal) -> str:
    """Format a percentage without trailing zeros ("12.5%", "30%")."""
    text = f"{value.normalize():f}"
    return f"{text}%"
