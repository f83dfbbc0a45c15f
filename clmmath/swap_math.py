"""A single step of a swap within one price range."""

from dataclasses import dataclass

from . import liquidity_math, sqrt_price_math
from .config import FEE_RATE_DENOMINATOR_VALUE
from .errors import AmmError, MaxTokenOverflowError, SqrtPriceLimitOverflowError
from .full_math import mul_div_ceil, mul_div_floor


@dataclass
class SwapStep:
    """Outcome of one swap step."""

    #: Price after the step; never beyond the target price.
    sqrt_price_next_x64: int = 0
    amount_in: int = 0
    amount_out: int = 0
    fee_amount: int = 0


def _unwrap(value: int | None) -> int:
    if value is None:
        raise OverflowError("multiply-divide result does not fit in 64 bits")
    return value


def _calculate_amount_in_range(
    sqrt_price_current_x64: int,
    sqrt_price_target_x64: int,
    liquidity: int,
    zero_for_one: bool,
    is_base_input: bool,
) -> int | None:
    """Amount in (or out) needed to reach the target, or None if it overflows 64 bits."""
    try:
        if is_base_input:
            if zero_for_one:
                return liquidity_math.get_delta_amount_0_unsigned(
                    sqrt_price_target_x64, sqrt_price_current_x64, liquidity, True
                )
            return liquidity_math.get_delta_amount_1_unsigned(
                sqrt_price_current_x64, sqrt_price_target_x64, liquidity, True
            )
        if zero_for_one:
            return liquidity_math.get_delta_amount_1_unsigned(
                sqrt_price_target_x64, sqrt_price_current_x64, liquidity, False
            )
        return liquidity_math.get_delta_amount_0_unsigned(
            sqrt_price_current_x64, sqrt_price_target_x64, liquidity, False
        )
    except MaxTokenOverflowError:
        return None
    except AmmError as exc:
        raise SqrtPriceLimitOverflowError(str(exc)) from exc


def compute_swap_step(
    sqrt_price_current_x64: int,
    sqrt_price_target_x64: int,
    liquidity: int,
    amount_remaining: int,
    fee_rate: int,
    is_base_input: bool,
    zero_for_one: bool,
    block_timestamp: int,
) -> SwapStep:
    """Swap ``amount_remaining`` in (or out) between the current and target prices.

    ``fee_rate`` is in millionths. ``block_timestamp`` does not affect the result.
    """
    if not 0 <= fee_rate <= FEE_RATE_DENOMINATOR_VALUE:
        raise ValueError(f"fee rate {fee_rate} exceeds {FEE_RATE_DENOMINATOR_VALUE}")

    step = SwapStep()
    if is_base_input:
        amount_remaining_less_fee = _unwrap(
            mul_div_floor(
                amount_remaining,
                FEE_RATE_DENOMINATOR_VALUE - fee_rate,
                FEE_RATE_DENOMINATOR_VALUE,
                64,
            )
        )
        amount_in = _calculate_amount_in_range(
            sqrt_price_current_x64, sqrt_price_target_x64, liquidity, zero_for_one, True
        )
        if amount_in is not None:
            step.amount_in = amount_in
        if amount_in is not None and amount_remaining_less_fee >= amount_in:
            step.sqrt_price_next_x64 = sqrt_price_target_x64
        else:
            step.sqrt_price_next_x64 = sqrt_price_math.get_next_sqrt_price_from_input(
                sqrt_price_current_x64, liquidity, amount_remaining_less_fee, zero_for_one
            )
    else:
        amount_out = _calculate_amount_in_range(
            sqrt_price_current_x64, sqrt_price_target_x64, liquidity, zero_for_one, False
        )
        if amount_out is not None:
            step.amount_out = amount_out
        if amount_out is not None and amount_remaining >= amount_out:
            step.sqrt_price_next_x64 = sqrt_price_target_x64
        else:
            step.sqrt_price_next_x64 = sqrt_price_math.get_next_sqrt_price_from_output(
                sqrt_price_current_x64, liquidity, amount_remaining, zero_for_one
            )

    reached_target = sqrt_price_target_x64 == step.sqrt_price_next_x64
    if zero_for_one:
        if not (reached_target and is_base_input):
            step.amount_in = liquidity_math.get_delta_amount_0_unsigned(
                step.sqrt_price_next_x64, sqrt_price_current_x64, liquidity, True
            )
        if not (reached_target and not is_base_input):
            step.amount_out = liquidity_math.get_delta_amount_1_unsigned(
                step.sqrt_price_next_x64, sqrt_price_current_x64, liquidity, False
            )
    else:
        if not (reached_target and is_base_input):
            step.amount_in = liquidity_math.get_delta_amount_1_unsigned(
                sqrt_price_current_x64, step.sqrt_price_next_x64, liquidity, True
            )
        if not (reached_target and not is_base_input):
            step.amount_out = liquidity_math.get_delta_amount_0_unsigned(
                sqrt_price_current_x64, step.sqrt_price_next_x64, liquidity, False
            )

    if not is_base_input and step.amount_out > amount_remaining:
        step.amount_out = amount_remaining

    if is_base_input and step.sqrt_price_next_x64 != sqrt_price_target_x64:
        # Target not reached: the remainder of the input, dust included, is the fee.
        if step.amount_in > amount_remaining:
            raise OverflowError("amount in exceeds the remaining amount")
        step.fee_amount = amount_remaining - step.amount_in
    else:
        step.fee_amount = _unwrap(
            mul_div_ceil(step.amount_in, fee_rate, FEE_RATE_DENOMINATOR_VALUE - fee_rate, 64)
        )
    return step