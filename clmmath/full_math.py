"""Overflow-resistant multiply-divide and rounding division."""

from __future__ import annotations

from .bignum import U64_MAX


def _check_operand(name: str, value: int, bits: int) -> None:
    if value < 0 or value >> bits:
        raise ValueError(f"{name}={value} does not fit in {bits} unsigned bits")


def _checked(val: int, num: int, denom: int, bits: int) -> None:
    if bits <= 0:
        raise ValueError(f"bit width must be positive, got {bits}")
    _check_operand("val", val, bits)
    _check_operand("num", num, bits)
    _check_operand("denom", denom, bits)
    if denom == 0:
        raise ZeroDivisionError("mul_div denominator is zero")


def mul_div_floor(val: int, num: int, denom: int, bits: int = 128) -> int | None:
    """``floor(val * num / denom)``, or None if it does not fit in ``bits``."""
    _checked(val, num, denom, bits)
    result = (val * num) // denom
    return None if result >> bits else result


def mul_div_ceil(val: int, num: int, denom: int, bits: int = 128) -> int | None:
    """``ceil(val * num / denom)``, or None if it does not fit in ``bits``."""
    _checked(val, num, denom, bits)
    result = (val * num + denom - 1) // denom
    return None if result >> bits else result


def to_underflow_u64(value: int) -> int:
    """Return ``value`` if it is below the u64 maximum, otherwise 0."""
    return value if value < U64_MAX else 0


def div_rounding_up(x: int, y: int) -> int:
    """``ceil(x / y)`` for non-negative operands; division by zero raises."""
    quotient, remainder = divmod(x, y)
    return quotient + (1 if remainder > 0 else 0)