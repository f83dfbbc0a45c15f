import pytest
from hypothesis import given
from hypothesis import strategies as st

from clmmath import full_math
from clmmath.bignum import U64_MAX, U128_MAX, U256_MAX

u64 = st.integers(min_value=0, max_value=U64_MAX)
nonzero_u64 = st.integers(min_value=1, max_value=U64_MAX)
u128 = st.integers(min_value=1, max_value=U128_MAX)


@given(u64, u64, nonzero_u64)
def test_scale_floor_u64(val, num, den):
    res = full_math.mul_div_floor(val, num, den, 64)
    product = val * num
    if product // den > U64_MAX:
        assert res is None
    else:
        assert res * den <= product < (res + 1) * den


@given(u64, u64, nonzero_u64)
def test_scale_ceil_u64(val, num, den):
    res = full_math.mul_div_ceil(val, num, den, 64)
    product = val * num
    if -(-product // den) > U64_MAX:
        assert res is None
    else:
        assert (res - 1) * den < product <= res * den


@given(u128, u128, u128)
def test_scale_floor_u128(val, num, den):
    res = full_math.mul_div_floor(val, num, den, 128)
    product = val * num
    if product // den > U128_MAX:
        assert res is None
    else:
        assert res * den <= product < (res + 1) * den


@given(u128, u128, u128)
def test_scale_ceil_u128(val, num, den):
    res = full_math.mul_div_ceil(val, num, den, 128)
    product = val * num
    if -(-product // den) > U128_MAX:
        assert res is None
    else:
        assert (res - 1) * den < product <= res * den


def test_floor_and_ceil_agree_on_exact_division():
    assert full_math.mul_div_floor(3, 4, 2, 64) == 6
    assert full_math.mul_div_ceil(3, 4, 2, 64) == 6


def test_u256_overflow_returns_none():
    assert full_math.mul_div_floor(U256_MAX, U256_MAX, 1, 256) is None
    assert full_math.mul_div_ceil(U256_MAX, 2, 2, 256) == U256_MAX


def test_zero_denominator_raises():
    with pytest.raises(ZeroDivisionError):
        full_math.mul_div_floor(1, 1, 0, 128)
    with pytest.raises(ZeroDivisionError):
        full_math.mul_div_ceil(1, 1, 0, 128)


def test_operand_wider_than_width_rejected():
    with pytest.raises(ValueError):
        full_math.mul_div_floor(U64_MAX + 1, 1, 1, 64)


def test_to_underflow_u64():
    assert full_math.to_underflow_u64(5) == 5
    assert full_math.to_underflow_u64(U64_MAX) == 0
    assert full_math.to_underflow_u64(U128_MAX) == 0


def test_divide_by_factor():
    assert full_math.div_rounding_up(4, 2) == 2


def test_divide_and_round_up():
    assert full_math.div_rounding_up(4, 3) == 2


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        full_math.div_rounding_up(2, 0)