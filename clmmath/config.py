"""AMM configuration account and its change event."""

import hashlib
from dataclasses import dataclass, field

from .errors import NotApprovedError

AMM_CONFIG_SEED = "amm_config"
FEE_RATE_DENOMINATOR_VALUE = 1_000_000

_ZERO_KEY = bytes(32)


def account_discriminator(name: str) -> bytes:
    """First 8 bytes of ``sha256("account:<name>")``, tagging an account type."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:8]


@dataclass
class AmmConfig:
    """Fee and tick settings shared by the pools created from it.

    Public keys are 32-byte ``bytes`` values.
    """

    bump: int = 0
    index: int = 0
    owner: bytes = _ZERO_KEY
    protocol_fee_rate: int = 0
    trade_fee_rate: int = 0
    tick_spacing: int = 0
    fund_fee_rate: int = 0
    padding_u32: int = 0
    fund_owner: bytes = _ZERO_KEY
    padding: list[int] = field(default_factory=lambda: [0, 0, 0])

    LEN = 8 + 1 + 2 + 32 + 4 + 4 + 2 + 64

    def is_authorized(self, signer: bytes, expect_pubkey: bytes) -> bool:
        """Return True if ``signer`` is the owner or the expected key, else raise."""
        if signer != self.owner and signer != expect_pubkey:
            raise NotApprovedError("signer is neither the config owner nor the expected key")
        return True


@dataclass(frozen=True)
class ConfigChangeEvent:
    """Emitted when a config is created or updated."""

    index: int
    owner: bytes
    protocol_fee_rate: int
    trade_fee_rate: int
    tick_spacing: int
    fund_fee_rate: int
    fund_owner: bytes