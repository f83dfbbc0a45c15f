"""Search a 1024-bit bitmap of initialized tick arrays.

The bitmap is a plain non-negative int of at most 1024 bits. Bit ``i`` stands
for the tick array whose start index is ``(i - 512) * tick_spacing * TICK_ARRAY_SIZE``.
"""

from .bignum import leading_zeros, shl, trailing_zeros
from .errors import InvalidTickIndexError
from .tick_math import MAX_TICK, MIN_TICK

#: Number of ticks held by one tick array.
TICK_ARRAY_SIZE = 60
#: Number of tick arrays one bitmap covers on each side of zero.
TICK_ARRAY_BITMAP_SIZE = 512

_BITMAP_BITS = 1024
_BITMAP_OFFSET = 512


def _tick_count(tick_spacing: int) -> int:
    return tick_spacing * TICK_ARRAY_SIZE


def _is_out_of_boundary(tick: int) -> bool:
    return tick < MIN_TICK or tick > MAX_TICK


def _array_start_index(tick_index: int, tick_spacing: int) -> int:
    ticks_in_array = _tick_count(tick_spacing)
    return (tick_index // ticks_in_array) * ticks_in_array


def _is_valid_start_index(tick_index: int, tick_spacing: int) -> bool:
    if _is_out_of_boundary(tick_index):
        if tick_index > MAX_TICK:
            return False
        return tick_index == _array_start_index(MIN_TICK, tick_spacing)
    return tick_index % _tick_count(tick_spacing) == 0


def _compressed(tick: int, multiplier: int) -> int:
    # Floor division: rounds towards negative infinity for negative ticks.
    return tick // multiplier + _BITMAP_OFFSET


def max_tick_in_tickarray_bitmap(tick_spacing: int) -> int:
    """Largest tick covered by the bitmap for ``tick_spacing``."""
    return tick_spacing * TICK_ARRAY_SIZE * TICK_ARRAY_BITMAP_SIZE


def get_bitmap_tick_boundary(tick_array_start_index: int, tick_spacing: int) -> tuple[int, int]:
    """Lower and upper tick bound of the bitmap block holding ``tick_array_start_index``."""
    ticks_in_one_bitmap = max_tick_in_tickarray_bitmap(tick_spacing)
    magnitude = abs(tick_array_start_index)
    m = magnitude // ticks_in_one_bitmap
    if tick_array_start_index < 0 and magnitude % ticks_in_one_bitmap != 0:
        m += 1
    min_value = ticks_in_one_bitmap * m
    if tick_array_start_index < 0:
        return -min_value, -min_value + ticks_in_one_bitmap
    return min_value, min_value + ticks_in_one_bitmap


def most_significant_bit(x: int) -> int | None:
    """Leading-zero count of the 1024-bit value, or None when it is zero."""
    if x == 0:
        return None
    return leading_zeros(x, _BITMAP_BITS)


def least_significant_bit(x: int) -> int | None:
    """Trailing-zero count of the 1024-bit value, or None when it is zero."""
    if x == 0:
        return None
    return trailing_zeros(x, _BITMAP_BITS)


def check_current_tick_array_is_initialized(
    bit_map: int, tick_current: int, tick_spacing: int
) -> tuple[bool, int]:
    """Whether the tick array holding ``tick_current`` is set, and its start index.

    Raises InvalidTickIndexError if the tick lies outside the tick range.
    """
    if _is_out_of_boundary(tick_current):
        raise InvalidTickIndexError(f"tick {tick_current} is outside [{MIN_TICK}, {MAX_TICK}]")
    multiplier = _tick_count(tick_spacing)
    compressed = _compressed(tick_current, multiplier)
    bit_pos = abs(compressed)
    mask = shl(1, bit_pos, _BITMAP_BITS) if bit_pos < _BITMAP_BITS else 0
    initialized = bool(bit_map & mask)
    return initialized, (compressed - _BITMAP_OFFSET) * multiplier


def next_initialized_tick_array_start_index(
    bit_map: int,
    last_tick_array_start_index: int,
    tick_spacing: int,
    zero_for_one: bool,
) -> tuple[bool, int]:
    """Find the next set tick array after ``last_tick_array_start_index``.

    Searches downwards when ``zero_for_one`` is true, upwards otherwise.
    Returns ``(found, start_index)``; when nothing is found the start index is
    the bitmap's edge, or the given index if the next array leaves the bitmap.
    """
    if not _is_valid_start_index(last_tick_array_start_index, tick_spacing):
        raise ValueError(
            f"{last_tick_array_start_index} is not a valid tick array start index "
            f"for tick spacing {tick_spacing}"
        )
    tick_boundary = max_tick_in_tickarray_bitmap(tick_spacing)
    step = _tick_count(tick_spacing)
    next_start = (
        last_tick_array_start_index - step if zero_for_one else last_tick_array_start_index + step
    )
    if next_start < -tick_boundary or next_start >= tick_boundary:
        return False, last_tick_array_start_index

    multiplier = step
    bit_pos = abs(_compressed(next_start, multiplier))

    if zero_for_one:
        # Look from the current bit towards the lower bits.
        offset_bit_map = shl(bit_map, _BITMAP_BITS - bit_pos - 1, _BITMAP_BITS)
        next_bit = most_significant_bit(offset_bit_map)
        if next_bit is not None:
            return True, (bit_pos - next_bit - _BITMAP_OFFSET) * multiplier
        return False, -tick_boundary

    # Look from the current bit towards the higher bits.
    offset_bit_map = bit_map >> bit_pos
    next_bit = least_significant_bit(offset_bit_map)
    if next_bit is not None:
        return True, (bit_pos + next_bit - _BITMAP_OFFSET) * multiplier
    return False, tick_boundary - step