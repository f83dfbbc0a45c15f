"""Fixed-width unsigned integer helpers on top of Python integers.

Values are plain non-negative ints; the ``bits`` arguments give the width
(64, 128, 256, 512 or 1024 in practice) that the value is confined to.
"""

from collections.abc import Iterable

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
U256_MAX = (1 << 256) - 1
U512_MAX = (1 << 512) - 1
U1024_MAX = (1 << 1024) - 1
I128_MAX = (1 << 127) - 1

# Q64.64 fixed point
Q64 = 1 << 64
RESOLUTION = 64


def _check(value: int, bits: int) -> None:
    if bits <= 0:
        raise ValueError(f"bit width must be positive, got {bits}")
    if value < 0:
        raise ValueError("unsigned integer can't be created from negative value")
    if value >> bits:
        raise OverflowError(f"value does not fit in {bits} bits")


def from_words(words: Iterable[int]) -> int:
    """Build an integer from little-endian 64-bit words."""
    result = 0
    for position, word in enumerate(words):
        if not 0 <= word <= WORD_MASK:
            raise ValueError(f"word {word} is not a 64-bit unsigned value")
        result |= word << (position * WORD_BITS)
    return result


def to_words(value: int, n_words: int) -> list[int]:
    """Split an integer into ``n_words`` little-endian 64-bit words."""
    _check(value, n_words * WORD_BITS)
    return [(value >> (i * WORD_BITS)) & WORD_MASK for i in range(n_words)]


def leading_zeros(value: int, bits: int) -> int:
    """Number of leading zero bits of ``value`` seen as a ``bits``-wide number."""
    _check(value, bits)
    return bits - value.bit_length()


def trailing_zeros(value: int, bits: int) -> int:
    """Number of trailing zero bits; ``bits`` for zero."""
    _check(value, bits)
    if value == 0:
        return bits
    return (value & -value).bit_length() - 1


def shl(value: int, shift: int, bits: int) -> int:
    """Shift left, dropping whatever moves past the top of the width."""
    _check(value, bits)
    if shift < 0:
        raise ValueError("negative shift count")
    return (value << shift) & ((1 << bits) - 1)


def as_u128(value: int) -> int:
    """Return ``value`` if it fits in 128 unsigned bits, else raise."""
    if value < 0 or value > U128_MAX:
        raise OverflowError("integer overflow when casting to u128")
    return value


def as_i128(value: int) -> int:
    """Return ``value`` if it fits in a non-negative signed 128-bit integer."""
    if value < 0 or value > I128_MAX:
        raise OverflowError("integer overflow when casting to i128")
    return value


def is_bit_set(value: int, index: int, bits: int) -> bool:
    """Whether bit ``index`` of ``value`` is set."""
    _check(value, bits)
    if not 0 <= index < bits:
        raise IndexError(f"bit index {index} out of range for {bits} bits")
    return bool((value >> index) & 1)