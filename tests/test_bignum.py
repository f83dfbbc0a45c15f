import pytest
from hypothesis import given
from hypothesis import strategies as st

from clmmath import bignum


def test_q64_from_words():
    assert bignum.from_words([0, 1]) == bignum.Q64
    assert bignum.Q64 == (bignum.U64_MAX + 1)


@given(st.integers(min_value=0, max_value=bignum.U256_MAX))
def test_words_round_trip(value):
    words = bignum.to_words(value, 4)
    assert len(words) == 4
    assert all(0 <= w <= bignum.U64_MAX for w in words)
    assert bignum.from_words(words) == value


def test_to_words_rejects_negative():
    with pytest.raises(ValueError):
        bignum.to_words(-1, 2)


def test_to_words_rejects_too_large():
    with pytest.raises(OverflowError):
        bignum.to_words(bignum.U128_MAX + 1, 2)


def test_from_words_rejects_wide_word():
    with pytest.raises(ValueError):
        bignum.from_words([bignum.U64_MAX + 1])


def test_zero_counts_are_full_width():
    assert bignum.leading_zeros(0, 1024) == 1024
    assert bignum.trailing_zeros(0, 1024) == 1024


def test_max_has_no_zeros():
    assert bignum.leading_zeros(bignum.U1024_MAX, 1024) == 0
    assert bignum.trailing_zeros(bignum.U1024_MAX, 1024) == 0


@given(st.integers(min_value=0, max_value=1023))
def test_single_bit_zero_counts(k):
    value = 1 << k
    assert bignum.trailing_zeros(value, 1024) == k
    assert bignum.leading_zeros(value, 1024) + k + 1 == 1024
    assert bignum.is_bit_set(value, k, 1024)


@given(st.integers(min_value=0, max_value=bignum.U128_MAX), st.integers(0, 200))
def test_shl_stays_in_width(value, shift):
    result = bignum.shl(value, shift, 128)
    assert 0 <= result <= bignum.U128_MAX
    if value:
        assert result == 0 or bignum.trailing_zeros(result, 128) >= shift


def test_shl_out_of_width_is_zero():
    assert bignum.shl(1, 1024, 1024) == 0
    assert bignum.shl(bignum.U1024_MAX, 0, 1024) == bignum.U1024_MAX


def test_as_u128_bounds():
    assert bignum.as_u128(bignum.U128_MAX) == bignum.U128_MAX
    with pytest.raises(OverflowError):
        bignum.as_u128(bignum.U128_MAX + 1)


def test_as_i128_bounds():
    assert bignum.as_i128(bignum.I128_MAX) == bignum.I128_MAX
    with pytest.raises(OverflowError):
        bignum.as_i128(bignum.I128_MAX + 1)


def test_is_bit_set_on_q64():
    assert bignum.is_bit_set(bignum.Q64, 64, 128) is True
    assert bignum.is_bit_set(bignum.Q64, 63, 128) is False


def test_is_bit_set_index_out_of_range():
    with pytest.raises(IndexError):
        bignum.is_bit_set(1, 128, 128)


def test_value_wider_than_width_is_rejected():
    with pytest.raises(OverflowError):
        bignum.leading_zeros(1 << 64, 64)