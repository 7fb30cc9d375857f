"""Price parsing, deal detection and price display helpers."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from ..config import config
from ..models import Product

PriceValue = Union[Decimal, str, int, float]

CENT = Decimal("0.01")


def parse_price(value: PriceValue) -> Decimal:
    """
    Parse a decimal string (or number) into a Decimal.

    Raises:
        ValueError: value is not a finite number
    """
    if isinstance(value, Decimal):
        parsed = value
    else:
        try:
            parsed = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"Not a numeric price: {value!r}") from None
    if not parsed.is_finite():
        raise ValueError(f"Not a numeric price: {value!r}")
    return parsed


def is_deal(price: Decimal, original_price: Optional[Decimal]) -> bool:
    """A deal has an original price strictly greater than the current one."""
    return original_price is not None and original_price > price


def is_on_sale(product: Product) -> bool:
    """Check whether a product is currently discounted."""
    return is_deal(product.price, product.original_price)


def discount_percentage(price: Decimal, original_price: Optional[Decimal]) -> int:
    """Whole-number discount off the original price, 0 when not a deal."""
    if not is_deal(price, original_price):
        return 0
    ratio = (original_price - price) / original_price * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_price(value: PriceValue, symbol: Optional[str] = None) -> str:
    """Format a price as fixed two-decimal text, e.g. ``$59.99``."""
    if symbol is None:
        symbol = config.currency_symbol
    amount = parse_price(value).quantize(CENT, rounding=ROUND_HALF_UP)
    return f"{symbol}{amount}"
