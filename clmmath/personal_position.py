"""Personal liquidity positions and the events emitted for them."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .bignum import Q64, U64_MAX, U128_MAX
from .full_math import mul_div_floor, to_underflow_u64

#: Number of reward tokens a pool can emit.
REWARD_NUM = 3
#: Seed prefix of position addresses.
POSITION_SEED = "position"

_ZERO_KEY = bytes(32)


@dataclass
class PositionRewardInfo:
    """Reward bookkeeping of a position for one reward token."""

    #: Q64.64 reward growth inside the range at the last update.
    growth_inside_last_x64: int = 0
    reward_amount_owed: int = 0

    LEN = 16 + 8


def _fresh_rewards() -> list[PositionRewardInfo]:
    return [PositionRewardInfo() for _ in range(REWARD_NUM)]


@dataclass
class PersonalPositionState:
    """A tokenized liquidity position; public keys are 32-byte values."""

    bump: bytes = b"\x00"
    nft_mint: bytes = _ZERO_KEY
    pool_id: bytes = _ZERO_KEY
    tick_lower_index: int = 0
    tick_upper_index: int = 0
    liquidity: int = 0
    fee_growth_inside_0_last_x64: int = 0
    fee_growth_inside_1_last_x64: int = 0
    token_fees_owed_0: int = 0
    token_fees_owed_1: int = 0
    reward_infos: list[PositionRewardInfo] = field(default_factory=_fresh_rewards)
    recent_epoch: int = 0
    padding: list[int] = field(default_factory=lambda: [0] * 7)

    LEN = (
        8 + 1 + 32 + 32 + 4 + 4 + 16 + 16 + 16 + 8 + 8
        + PositionRewardInfo.LEN * REWARD_NUM + 64
    )

    def seeds(self) -> tuple[bytes, bytes, bytes]:
        """Seeds that derive the position's address."""
        return POSITION_SEED.encode(), bytes(self.nft_mint), bytes(self.bump)

    def update_rewards(
        self, reward_growths_inside: Sequence[int], add_delta: bool, recent_epoch: int
    ) -> None:
        """Record the reward growths inside the range and, if ``add_delta``, credit rewards.

        A growth delta that makes the owed increment reach the u64 maximum
        credits nothing. Raises OverflowError if an owed amount would exceed
        64 bits; the state is then left unchanged.
        """
        growths = list(reward_growths_inside)
        if len(growths) != REWARD_NUM:
            raise ValueError(f"expected {REWARD_NUM} reward growths, got {len(growths)}")

        updated = []
        for index, (growth, info) in enumerate(zip(growths, self.reward_infos)):
            if not 0 <= growth <= U128_MAX:
                raise ValueError(f"reward growth {growth} does not fit in 128 bits")
            owed = info.reward_amount_owed
            if add_delta:
                # Wrapping subtraction: an overflowed growth delta forfeits the rewards.
                growth_delta = (growth - info.growth_inside_last_x64) & U128_MAX
                owed_delta = to_underflow_u64(
                    mul_div_floor(growth_delta, self.liquidity, Q64, 256)
                )
                owed += owed_delta
                if owed > U64_MAX:
                    raise OverflowError(
                        f"reward {index} owed amount overflows 64 bits; collect it first"
                    )
            updated.append(PositionRewardInfo(growth, owed))

        self.reward_infos = updated
        self.recent_epoch = recent_epoch


@dataclass(frozen=True)
class CreatePersonalPositionEvent:
    """Emitted when a position is created."""

    pool_state: bytes
    minter: bytes
    nft_owner: bytes
    tick_lower_index: int
    tick_upper_index: int
    liquidity: int
    deposit_amount_0: int
    deposit_amount_1: int
    deposit_amount_0_transfer_fee: int
    deposit_amount_1_transfer_fee: int


@dataclass(frozen=True)
class IncreaseLiquidityEvent:
    """Emitted when liquidity of a position is increased."""

    position_nft_mint: bytes
    liquidity: int
    amount_0: int
    amount_1: int
    amount_0_transfer_fee: int
    amount_1_transfer_fee: int


@dataclass(frozen=True)
class DecreaseLiquidityEvent:
    """Emitted when liquidity of a position is decreased."""

    position_nft_mint: bytes
    liquidity: int
    decrease_amount_0: int
    decrease_amount_1: int
    fee_amount_0: int
    fee_amount_1: int
    reward_amounts: tuple[int, ...]
    transfer_fee_0: int
    transfer_fee_1: int


@dataclass(frozen=True)
class LiquidityCalculateEvent:
    """Emitted with the amounts computed for a liquidity change."""

    pool_liquidity: int
    pool_sqrt_price_x64: int
    pool_tick: int
    calc_amount_0: int
    calc_amount_1: int
    trade_fee_owed_0: int
    trade_fee_owed_1: int
    transfer_fee_0: int
    transfer_fee_1: int


@dataclass(frozen=True)
class CollectPersonalFeeEvent:
    """Emitted when fees of a position are collected."""

    position_nft_mint: bytes
    recipient_token_account_0: bytes
    recipient_token_account_1: bytes
    amount_0: int
    amount_1: int


@dataclass(frozen=True)
class UpdateRewardInfosEvent:
    """Emitted when the reward growths of a pool are updated."""

    reward_growth_global_x64: tuple[int, ...]