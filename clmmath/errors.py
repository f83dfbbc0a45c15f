"""Exceptions raised by the AMM math and state helpers."""


class AmmError(Exception):
    """Base class for every error the package reports."""


class LiquiditySubValueError(AmmError):
    """Removing liquidity would leave an invalid value."""


class LiquidityAddValueError(AmmError):
    """Adding liquidity would overflow."""


class MaxTokenOverflowError(AmmError):
    """A token amount does not fit in 64 bits."""


class SqrtPriceLimitOverflowError(AmmError):
    """The square-root price limit leads to an overflow."""


class TickUpperOverflowError(AmmError):
    """A tick lies beyond the supported range."""


class SqrtPriceOutOfRangeError(AmmError):
    """A square-root price lies outside the supported range."""


class InvalidTickIndexError(AmmError):
    """A tick index lies outside the tick boundaries."""


class NotApprovedError(AmmError):
    """The signer is not allowed to perform the action."""