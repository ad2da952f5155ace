"""Unit-suffix conversion for part sizes."""

from common.constants import DEFAULT_UNIT, UNIT_MULTIPLIERS
from common.exceptions import InvalidArgumentError


def is_unit_token(token: str) -> bool:
    """Return True if token names a size unit (-b, -kb, -mb, -gb)."""
    return token.lower() in UNIT_MULTIPLIERS


def convert_to_bytes(value: int, unit: str = DEFAULT_UNIT) -> int:
    """
    Convert a size expressed in a unit to bytes.

    Args:
        value: Numeric size
        unit: One of -b, -kb, -mb, -gb (case insensitive)

    Returns:
        Size in bytes

    Raises:
        InvalidArgumentError: If unit is unknown or the result is not positive
    """
    multiplier = UNIT_MULTIPLIERS.get(unit.lower())
    if multiplier is None:
        units = ", ".join(UNIT_MULTIPLIERS)
        raise InvalidArgumentError(f"Unknown unit {unit!r}, expected one of: {units}")
    size = value * multiplier
    if size <= 0:
        raise InvalidArgumentError(f"Part size must be positive, got {value} {unit}")
    return size
