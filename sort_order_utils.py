# sort_order_utils.py
# Pure ordering checks over values read from the catalog page
# No driver needed - safe to call anywhere

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, List, Sequence, Union

from shop_exceptions import ParseError

CURRENCY_SYMBOL = "$"
PRICE_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")

PriceValue = Union[str, Decimal]


# ------------------------------------------------------------
# Price parsing
# ------------------------------------------------------------

def parse_price(text: str) -> Decimal:
    """
    Parse a catalog price such as "$29.99" into a Decimal

    Surrounding whitespace and one leading currency symbol are stripped, the
    remainder must be plain digits with an optional fraction ("." separator).

    Raises:
        ParseError: text is not a well-formed price
    """
    if not isinstance(text, str):
        raise ParseError(repr(text), f"Price text must be a string, got {type(text).__name__}")

    cleaned = text.strip()
    if cleaned.startswith(CURRENCY_SYMBOL):
        cleaned = cleaned[len(CURRENCY_SYMBOL):].strip()

    if not PRICE_PATTERN.match(cleaned):
        raise ParseError(text)

    try:
        return Decimal(cleaned)
    except InvalidOperation as e:
        raise ParseError(text) from e


def _as_price(value: PriceValue) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return parse_price(value)


# ------------------------------------------------------------
# Order predicates
# ------------------------------------------------------------

def _pairs(values: Sequence) -> List[tuple]:
    return list(zip(values, values[1:]))


def is_ascending_alpha(values: Sequence[str]) -> bool:
    """A to Z check over adjacent pairs, ordinal after upper-casing both sides"""
    values = list(values)
    return all(a.upper() <= b.upper() for a, b in _pairs(values))


def is_descending_alpha(values: Sequence[str]) -> bool:
    """Z to A check over adjacent pairs, ordinal after upper-casing both sides"""
    values = list(values)
    return all(a.upper() >= b.upper() for a, b in _pairs(values))


def is_ascending_price(values: Sequence[PriceValue]) -> bool:
    """Low to high check; string values are parsed with parse_price"""
    prices = [_as_price(v) for v in values]
    return all(a <= b for a, b in _pairs(prices))


def is_descending_price(values: Sequence[PriceValue]) -> bool:
    """High to low check; string values are parsed with parse_price"""
    prices = [_as_price(v) for v in values]
    return all(a >= b for a, b in _pairs(prices))


# ------------------------------------------------------------
# Sort dropdown options of the catalog page
# ------------------------------------------------------------
SORT_OPTIONS: Dict[str, Dict[str, Union[str, Callable[[Sequence], bool]]]] = {
    "az": {
        "label": "Name (A to Z)",
        "item_class": "inventory_item_name",
        "predicate": is_ascending_alpha,
    },
    "za": {
        "label": "Name (Z to A)",
        "item_class": "inventory_item_name",
        "predicate": is_descending_alpha,
    },
    "lohi": {
        "label": "Price (low to high)",
        "item_class": "inventory_item_price",
        "predicate": is_ascending_price,
    },
    "hilo": {
        "label": "Price (high to low)",
        "item_class": "inventory_item_price",
        "predicate": is_descending_price,
    },
}
