"""Next square-root price after adding or removing an amount of a token."""

from .bignum import RESOLUTION, U128_MAX, U256_MAX, as_u128
from .full_math import div_rounding_up, mul_div_ceil


def _ceil_u256(val: int, num: int, denom: int) -> int:
    result = mul_div_ceil(val, num, denom, 256)
    if result is None:
        raise OverflowError("multiply-divide result does not fit in 256 bits")
    return result


def get_next_sqrt_price_from_amount_0_rounding_up(
    sqrt_price_x64: int, liquidity: int, amount: int, add: bool
) -> int:
    """Next price after a change of token_0, rounded up.

    Uses ``sqrt(P') = sqrt(P) * L / (L +/- dx * sqrt(P))``.
    """
    if amount == 0:
        return sqrt_price_x64
    numerator_1 = liquidity << RESOLUTION
    product = amount * sqrt_price_x64

    if add:
        if product <= U256_MAX:
            denominator = numerator_1 + product
            if denominator <= U256_MAX:
                return as_u128(_ceil_u256(numerator_1, sqrt_price_x64, denominator))
        # Alternate form sqrt(P') = L / (L / sqrt(P) + dx).
        return as_u128(div_rounding_up(numerator_1, numerator_1 // sqrt_price_x64 + amount))

    if product > U256_MAX:
        raise OverflowError("amount * sqrt price does not fit in 256 bits")
    if product > numerator_1:
        raise OverflowError("removed token_0 exceeds what the liquidity holds")
    denominator = numerator_1 - product
    return as_u128(_ceil_u256(numerator_1, sqrt_price_x64, denominator))


def get_next_sqrt_price_from_amount_1_rounding_down(
    sqrt_price_x64: int, liquidity: int, amount: int, add: bool
) -> int:
    """Next price after a change of token_1, rounded down.

    Uses ``sqrt(P') = sqrt(P) +/- dy / L``.
    """
    shifted = amount << RESOLUTION
    if add:
        quotient = as_u128(shifted // liquidity)
        result = sqrt_price_x64 + quotient
        if result > U128_MAX:
            raise OverflowError("next sqrt price does not fit in 128 bits")
        return result

    quotient = as_u128(div_rounding_up(shifted, liquidity))
    if quotient > sqrt_price_x64:
        raise OverflowError("removed token_1 exceeds what the price allows")
    return sqrt_price_x64 - quotient


def _require_positive(sqrt_price_x64: int, liquidity: int) -> None:
    if sqrt_price_x64 <= 0:
        raise ValueError("sqrt price must be positive")
    if liquidity <= 0:
        raise ValueError("liquidity must be positive")


def get_next_sqrt_price_from_input(
    sqrt_price_x64: int, liquidity: int, amount_in: int, zero_for_one: bool
) -> int:
    """Next price after ``amount_in`` of the input token is swapped in."""
    _require_positive(sqrt_price_x64, liquidity)
    if zero_for_one:
        return get_next_sqrt_price_from_amount_0_rounding_up(
            sqrt_price_x64, liquidity, amount_in, True
        )
    return get_next_sqrt_price_from_amount_1_rounding_down(
        sqrt_price_x64, liquidity, amount_in, True
    )


def get_next_sqrt_price_from_output(
    sqrt_price_x64: int, liquidity: int, amount_out: int, zero_for_one: bool
) -> int:
    """Next price after ``amount_out`` of the output token is taken out."""
    _require_positive(sqrt_price_x64, liquidity)
    if zero_for_one:
        return get_next_sqrt_price_from_amount_1_rounding_down(
            sqrt_price_x64, liquidity, amount_out, False
        )
    return get_next_sqrt_price_from_amount_0_rounding_up(
        sqrt_price_x64, liquidity, amount_out, False
    )