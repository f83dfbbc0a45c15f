# clmmath

Exact integer arithmetic and account state for a concentrated-liquidity
automated market maker. All prices are Q64.64 fixed-point square roots held
in plain Python integers. Results are bit-for-bit reproducible, and the
overflow rules of the fixed-width types the pool works with are kept: where
a value would not fit, an exception is raised.

## Install

```
pip install .
pip install ".[test]"   # with pytest and hypothesis
```

The package has no runtime dependencies beyond the standard library.

## What is inside

| Module | Contents |
| --- | --- |
| `clmmath.bignum` | Fixed-width helpers on plain ints: `from_words`, `to_words`, `shl`, `leading_zeros`, `trailing_zeros`, `is_bit_set`, `as_u128`, `as_i128`, plus constants such as `Q64`, `U64_MAX`, `U128_MAX` |
| `clmmath.full_math` | `mul_div_floor` and `mul_div_ceil`, which return `None` when the result does not fit the given width; `div_rounding_up`; `to_underflow_u64` |
| `clmmath.tick_math` | `get_sqrt_price_at_tick`, `get_tick_at_sqrt_price`, and the bounds `MIN_TICK`, `MAX_TICK`, `MIN_SQRT_PRICE_X64`, `MAX_SQRT_PRICE_X64` |
| `clmmath.sqrt_price_math` | The next square-root price after an input or output amount: `get_next_sqrt_price_from_input`, `get_next_sqrt_price_from_output` and the two per-token helpers |
| `clmmath.liquidity_math` | `add_delta`, liquidity from token amounts (`get_liquidity_from_amounts` and friends), token amounts from liquidity (`get_delta_amount_0_unsigned`, `get_delta_amount_1_unsigned`, the signed forms, `get_delta_amounts_signed`) |
| `clmmath.swap_math` | `compute_swap_step`, which returns a `SwapStep` with the next price, amount in, amount out and fee |
| `clmmath.tick_array_bit_map` | Lookups of initialized tick arrays in a 1024-bit bitmap: `check_current_tick_array_is_initialized`, `next_initialized_tick_array_start_index`, `get_bitmap_tick_boundary`, `most_significant_bit`, `least_significant_bit`, `max_tick_in_tickarray_bitmap` |
| `clmmath.config` | `AmmConfig` with `is_authorized`, `ConfigChangeEvent`, `account_discriminator`, `FEE_RATE_DENOMINATOR_VALUE` |
| `clmmath.operation_account` | `OperationState`, the registry of operation owners and whitelisted mints, with `to_bytes` and `from_bytes` for its packed layout |
| `clmmath.personal_position` | `PersonalPositionState` with `seeds` and `update_rewards`, `PositionRewardInfo`, and the position event records |
| `clmmath.errors` | `AmmError` and its subclasses |

Public keys are plain 32-byte `bytes` values throughout.

## Examples

Ticks and prices:

```python
from clmmath.tick_math import get_sqrt_price_at_tick, get_tick_at_sqrt_price

price = get_sqrt_price_at_tick(-28861)
assert get_tick_at_sqrt_price(price) == -28861
```

One swap step, with a fee rate in millionths:

```python
from clmmath.swap_math import compute_swap_step
from clmmath.tick_math import get_sqrt_price_at_tick

step = compute_swap_step(
    sqrt_price_current_x64=get_sqrt_price_at_tick(100),
    sqrt_price_target_x64=get_sqrt_price_at_tick(0),
    liquidity=10**12,
    amount_remaining=1_000_000,
    fee_rate=3000,
    is_base_input=True,
    zero_for_one=True,
    block_timestamp=1,
)
print(step.amount_in, step.amount_out, step.fee_amount, step.sqrt_price_next_x64)
```

Rounding division:

```python
from clmmath.full_math import div_rounding_up, mul_div_ceil

assert mul_div_ceil(5, 2, 3, 64) == 4
assert div_rounding_up(4, 3) == 2
```

Operation owners round-trip through the account layout:

```python
from clmmath.operation_account import OperationState

state = OperationState()
state.update_operation_owner([bytes([1]) * 32, bytes([2]) * 32])
restored = OperationState.from_bytes(state.to_bytes())
assert restored.validate_operation_owner(bytes([1]) * 32)
```

## Errors

Failures the pool reports are raised as subclasses of
`clmmath.errors.AmmError`: for example `MaxTokenOverflowError` when a token
amount does not fit in 64 bits, `TickUpperOverflowError` when a tick is out
of range, `SqrtPriceOutOfRangeError` for a price outside the supported
range, `InvalidTickIndexError` from the bitmap lookups, and
`NotApprovedError` from `AmmConfig.is_authorized`. Arithmetic that would
leave its fixed width raises `OverflowError`; invalid arguments raise
`ValueError`.

## What it does not do

This is a library of calculations and account records, not a running pool.
It does not keep a history of price observations, does not store or load
accounts other than the operation account's byte layout, does not process
transactions or move tokens, and has no command-line tool. The caller
supplies values such as the current epoch (`PersonalPositionState.update_rewards`
takes it as an argument).

## Running the tests

```
pytest
```