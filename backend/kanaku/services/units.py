"""
Unit helpers: which units take fractional quantities, and display labels.
"""

from decimal import Decimal

# Weight and volume units accept decimals; count-based units use whole numbers
DECIMAL_UNITS = ("kg", "g", "l", "ml")

UNIT_LABELS = {
    "kg": "kg",
    "g": "g",
    "l": "L",
    "ml": "ml",
    "pcs": "pcs",
    "box": "box",
    "pack": "pack",
    "set": "set",
    "pair": "pair",
    "dozen": "dz",
}


def is_decimal_unit(unit: str) -> bool:
    return unit in DECIMAL_UNITS


def unit_label(unit: str) -> str:
    return UNIT_LABELS.get(unit, unit)


def is_valid_quantity(unit: str, quantity) -> bool:
    """Count-based units only take whole quantities."""
    value = Decimal(str(quantity))
    if not value.is_finite():
        return False
    if is_decimal_unit(unit):
        return True
    return value % 1 == 0
