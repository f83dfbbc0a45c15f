import pytest

from clmmath.bignum import U1024_MAX, from_words
from clmmath.errors import InvalidTickIndexError
from clmmath.tick_array_bit_map import (
    check_current_tick_array_is_initialized,
    get_bitmap_tick_boundary,
    least_significant_bit,
    max_tick_in_tickarray_bitmap,
    most_significant_bit,
    next_initialized_tick_array_start_index,
)
from clmmath.tick_math import MAX_TICK

EIGEN_WORDS = [
    1,
    0,
    0,
    0,
    0,
    0,
    9223372036854775808,
    16140901064495857665,
    7,
    1,
    0,
    0,
    0,
    0,
    0,
    9223372036854775808,
]


def _walk(bit_map, start, tick_spacing, zero_for_one, steps=5):
    results = []
    current = start
    for _ in range(steps):
        found, index = next_initialized_tick_array_start_index(
            bit_map, current, tick_spacing, zero_for_one
        )
        results.append((found, index))
        if not found:
            break
        current = index
    return results


def test_check_current_tick_array_is_initialized():
    bit_map = from_words([1] + [0] * 14 + [1 << 63])
    starts = set()
    tick_current = -307200
    for _ in range(1024):
        initialized, start = check_current_tick_array_is_initialized(bit_map, tick_current, 10)
        if initialized:
            starts.add(start)
        tick_current += 600
    assert starts == {-307200, 306600}


def test_check_current_tick_array_rounds_towards_negative_infinity():
    bit_map = 1 << 511
    assert check_current_tick_array_is_initialized(bit_map, -1, 10) == (True, -600)
    assert check_current_tick_array_is_initialized(bit_map, 0, 10) == (False, 0)


def test_check_current_tick_array_out_of_boundary():
    with pytest.raises(InvalidTickIndexError):
        check_current_tick_array_is_initialized(U1024_MAX, MAX_TICK + 1, 10)


def test_find_next_positive_price_down():
    assert _walk(U1024_MAX, 306600, 10, True) == [
        (True, 306000),
        (True, 305400),
        (True, 304800),
        (True, 304200),
        (True, 303600),
    ]


def test_find_next_negative_price_down():
    assert _walk(U1024_MAX, -307200 + 600 + 600, 10, True) == [
        (True, -306600),
        (True, -307200),
        (False, -307200),
    ]


def test_find_next_negative_price_down_cross_zero():
    assert _walk(U1024_MAX, 1800, 10, True) == [
        (True, 1200),
        (True, 600),
        (True, 0),
        (True, -600),
        (True, -1200),
    ]


def test_find_previous_positive_price_up():
    assert _walk(U1024_MAX, 306600 - 600 - 600, 10, False) == [
        (True, 306000),
        (True, 306600),
        (False, 306600),
    ]


def test_find_previous_negative_price_up():
    assert _walk(U1024_MAX, -307200, 10, False) == [
        (True, -306600),
        (True, -306000),
        (True, -305400),
        (True, -304800),
        (True, -304200),
    ]


def test_find_previous_negative_price_up_cross_zero():
    assert _walk(U1024_MAX, -1800, 10, False) == [
        (True, -1200),
        (True, -600),
        (True, 0),
        (True, 600),
        (True, 1200),
    ]


@pytest.mark.parametrize(
    "start, zero_for_one, expected",
    [
        (0, True, -600),
        (-600, True, -1200),
        (-1200, True, -1800),
        (-1800, True, -38400),
        (-38400, True, -39000),
        (-39000, True, -307200),
        (0, False, 600),
        (600, False, 1200),
        (1200, False, 38400),
        (38400, False, 306600),
    ],
)
def test_find_next_with_eigenvalues(start, zero_for_one, expected):
    bit_map = from_words(EIGEN_WORDS)
    _, index = next_initialized_tick_array_start_index(bit_map, start, 10, zero_for_one)
    assert index == expected


def test_next_initialized_boundary():
    # (MIN_TICK / 60 - 1) * 60 with truncating division
    start = -443640
    assert next_initialized_tick_array_start_index(U1024_MAX, start, 1, False) == (False, start)
    # (MAX_TICK / 60) * 60
    start = 443580
    assert next_initialized_tick_array_start_index(U1024_MAX, start, 1, True) == (False, start)


def test_next_initialized_not_found_returns_edges():
    assert next_initialized_tick_array_start_index(0, 0, 10, True) == (False, -307200)
    assert next_initialized_tick_array_start_index(0, 0, 10, False) == (False, 306600)


def test_next_initialized_rejects_invalid_start_index():
    with pytest.raises(ValueError):
        next_initialized_tick_array_start_index(U1024_MAX, 7, 10, True)


def test_get_bitmap_tick_boundary():
    assert get_bitmap_tick_boundary(-430080, 1) == (-430080, -399360)
    assert get_bitmap_tick_boundary(-430140, 1) == (-460800, -430080)
    assert get_bitmap_tick_boundary(430080, 1) == (430080, 460800)
    assert get_bitmap_tick_boundary(430020, 1) == (399360, 430080)


def test_max_tick_in_tickarray_bitmap():
    assert max_tick_in_tickarray_bitmap(10) == 307200
    assert max_tick_in_tickarray_bitmap(1) == 30720


def test_significant_bits():
    assert most_significant_bit(0) is None
    assert least_significant_bit(0) is None
    assert most_significant_bit(1) == 1023
    assert least_significant_bit(1) == 0
    assert most_significant_bit(1 << 1023) == 0
    assert least_significant_bit(1 << 1023) == 1023
    assert least_significant_bit(0b1011000) == 3