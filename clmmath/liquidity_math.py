"""Liquidity arithmetic: amounts to liquidity and liquidity to token deltas."""

from .bignum import Q64, RESOLUTION, U128_MAX, U64_MAX
from .errors import LiquidityAddValueError, LiquiditySubValueError, MaxTokenOverflowError
from .full_math import div_rounding_up, mul_div_ceil, mul_div_floor
from .tick_math import get_sqrt_price_at_tick


def _ordered(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


def _unwrap(value: int | None) -> int:
    if value is None:
        raise OverflowError("multiply-divide result does not fit the target width")
    return value


def add_delta(x: int, y: int) -> int:
    """Apply the signed liquidity delta ``y`` to liquidity ``x``.

    Raises LiquiditySubValueError on underflow and LiquidityAddValueError on
    overflow of 128 bits.
    """
    if y < 0:
        if -y > x:
            raise LiquiditySubValueError(f"cannot remove {-y} from liquidity {x}")
        return x + y
    z = x + y
    if z > U128_MAX:
        raise LiquidityAddValueError(f"adding {y} to liquidity {x} overflows 128 bits")
    return z


def get_liquidity_from_amount_0(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_0: int
) -> int:
    """Liquidity for ``amount_0`` over a price range.

    ``L = dx * (sqrt(P_upper) * sqrt(P_lower)) / (sqrt(P_upper) - sqrt(P_lower))``
    """
    lower, upper = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    intermediate = _unwrap(mul_div_floor(lower, upper, Q64, 128))
    return _unwrap(mul_div_floor(amount_0, intermediate, upper - lower, 128))


def get_liquidity_from_amount_1(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_1: int
) -> int:
    """Liquidity for ``amount_1`` over a price range: ``L = dy / (sqrt(P_upper) - sqrt(P_lower))``."""
    lower, upper = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    return _unwrap(mul_div_floor(amount_1, Q64, upper - lower, 128))


def get_liquidity_from_amounts(
    sqrt_ratio_x64: int,
    sqrt_ratio_a_x64: int,
    sqrt_ratio_b_x64: int,
    amount_0: int,
    amount_1: int,
) -> int:
    """Maximum liquidity the two amounts buy at the current price and range."""
    lower, upper = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    if sqrt_ratio_x64 <= lower:
        return get_liquidity_from_amount_0(lower, upper, amount_0)
    if sqrt_ratio_x64 < upper:
        return min(
            get_liquidity_from_amount_0(sqrt_ratio_x64, upper, amount_0),
            get_liquidity_from_amount_1(lower, sqrt_ratio_x64, amount_1),
        )
    return get_liquidity_from_amount_1(lower, upper, amount_1)


def get_liquidity_from_single_amount_0(
    sqrt_ratio_x64: int, sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_0: int
) -> int:
    """Liquidity bought by ``amount_0`` alone; zero when the price is above the range."""
    lower, upper = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    if sqrt_ratio_x64 <= lower:
        return get_liquidity_from_amount_0(lower, upper, amount_0)
    if sqrt_ratio_x64 < upper:
        return get_liquidity_from_amount_0(sqrt_ratio_x64, upper, amount_0)
    return 0


def get_liquidity_from_single_amount_1(
    sqrt_ratio_x64: int, sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, amount_1: int
) -> int:
    """Liquidity bought by ``amount_1`` alone; zero when the price is below the range."""
    lower, upper = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    if sqrt_ratio_x64 <= lower:
        return 0
    if sqrt_ratio_x64 < upper:
        return get_liquidity_from_amount_1(lower, sqrt_ratio_x64, amount_1)
    return get_liquidity_from_amount_1(lower, upper, amount_1)


def _check_u64(result: int) -> int:
    if result > U64_MAX:
        raise MaxTokenOverflowError(f"token amount {result} does not fit in 64 bits")
    return result


def get_delta_amount_0_unsigned(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int, round_up: bool
) -> int:
    """Token_0 amount for ``liquidity`` over a range.

    ``dx = L * (sqrt(P_upper) - sqrt(P_lower)) / (sqrt(P_upper) * sqrt(P_lower))``
    """
    lower, upper = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    numerator_1 = liquidity << RESOLUTION
    numerator_2 = upper - lower
    if lower <= 0:
        raise ValueError("lower sqrt price must be positive")

    if round_up:
        result = div_rounding_up(
            _unwrap(mul_div_ceil(numerator_1, numerator_2, upper, 256)), lower
        )
    else:
        result = _unwrap(mul_div_floor(numerator_1, numerator_2, upper, 256)) // lower
    return _check_u64(result)


def get_delta_amount_1_unsigned(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int, round_up: bool
) -> int:
    """Token_1 amount for ``liquidity`` over a range: ``dy = L * (sqrt(P_upper) - sqrt(P_lower))``."""
    lower, upper = _ordered(sqrt_ratio_a_x64, sqrt_ratio_b_x64)
    rounding = mul_div_ceil if round_up else mul_div_floor
    result = _unwrap(rounding(liquidity, upper - lower, Q64, 256))
    return _check_u64(result)


def get_delta_amount_0_signed(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int
) -> int:
    """Token_0 amount for a signed liquidity change: rounds up when adding, down when removing."""
    if liquidity < 0:
        return get_delta_amount_0_unsigned(sqrt_ratio_a_x64, sqrt_ratio_b_x64, -liquidity, False)
    return get_delta_amount_0_unsigned(sqrt_ratio_a_x64, sqrt_ratio_b_x64, liquidity, True)


def get_delta_amount_1_signed(
    sqrt_ratio_a_x64: int, sqrt_ratio_b_x64: int, liquidity: int
) -> int:
    """Token_1 amount for a signed liquidity change: rounds up when adding, down when removing."""
    if liquidity < 0:
        return get_delta_amount_1_unsigned(sqrt_ratio_a_x64, sqrt_ratio_b_x64, -liquidity, False)
    return get_delta_amount_1_unsigned(sqrt_ratio_a_x64, sqrt_ratio_b_x64, liquidity, True)


def get_delta_amounts_signed(
    tick_current: int,
    sqrt_price_x64_current: int,
    tick_lower: int,
    tick_upper: int,
    liquidity_delta: int,
) -> tuple[int, int]:
    """Both token amounts for a liquidity change on the range ``[tick_lower, tick_upper)``."""
    amount_0 = 0
    amount_1 = 0
    if tick_current < tick_lower:
        amount_0 = get_delta_amount_0_signed(
            get_sqrt_price_at_tick(tick_lower),
            get_sqrt_price_at_tick(tick_upper),
            liquidity_delta,
        )
    elif tick_current < tick_upper:
        amount_0 = get_delta_amount_0_signed(
            sqrt_price_x64_current, get_sqrt_price_at_tick(tick_upper), liquidity_delta
        )
        amount_1 = get_delta_amount_1_signed(
            get_sqrt_price_at_tick(tick_lower), sqrt_price_x64_current, liquidity_delta
        )
    else:
        amount_1 = get_delta_amount_1_signed(
            get_sqrt_price_at_tick(tick_lower),
            get_sqrt_price_at_tick(tick_upper),
            liquidity_delta,
        )
    return amount_0, amount_1