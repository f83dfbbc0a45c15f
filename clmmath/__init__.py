"""Exact fixed-point math and account state for concentrated-liquidity pools."""

__version__ = "0.1.0"

__all__ = [
    "bignum",
    "config",
    "errors",
    "full_math",
    "liquidity_math",
    "operation_account",
    "personal_position",
    "sqrt_price_math",
    "swap_math",
    "tick_array_bit_map",
    "tick_math",
]