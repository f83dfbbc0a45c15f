"""Operation account: the operators and the whitelisted reward mints."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .config import account_discriminator

OPERATION_SEED = "operation"
OPERATION_SIZE = 10
WHITE_MINT_SIZE = 100

PUBKEY_LEN = 32
DEFAULT_PUBKEY = bytes(PUBKEY_LEN)

_DISCRIMINATOR = account_discriminator("OperationState")


def _key(value: bytes | bytearray) -> bytes:
    if not isinstance(value, (bytes, bytearray)) or len(value) != PUBKEY_LEN:
        raise ValueError(f"a public key must be {PUBKEY_LEN} bytes")
    return bytes(value)


def _filled(keys: list[bytes], size: int, what: str) -> list[bytes]:
    if len(keys) > size:
        raise ValueError(f"{len(keys)} {what} do not fit in {size} slots")
    return keys + [DEFAULT_PUBKEY] * (size - len(keys))


def _merged(current: Iterable[bytes], keys: Iterable[bytes]) -> list[bytes]:
    """Current and new keys, without the default key and without repeats."""
    combined = [*current, *(_key(k) for k in keys)]
    return list(dict.fromkeys(k for k in combined if k != DEFAULT_PUBKEY))


def _without(current: Iterable[bytes], keys: Iterable[bytes]) -> list[bytes]:
    removed = {_key(k) for k in keys}
    return [k for k in current if k not in removed]


def _defaults(size: int) -> list[bytes]:
    return [DEFAULT_PUBKEY] * size


@dataclass
class OperationState:
    """Operation owners and whitelisted mints; public keys are 32-byte values."""

    bump: int = 0
    operation_owners: list[bytes] = field(default_factory=lambda: _defaults(OPERATION_SIZE))
    whitelist_mints: list[bytes] = field(default_factory=lambda: _defaults(WHITE_MINT_SIZE))

    LEN = 8 + 1 + PUBKEY_LEN * OPERATION_SIZE + PUBKEY_LEN * WHITE_MINT_SIZE

    def initialize(self, bump: int) -> None:
        """Reset the account with the given bump."""
        self.bump = bump
        self.operation_owners = _defaults(OPERATION_SIZE)
        self.whitelist_mints = _defaults(WHITE_MINT_SIZE)

    def validate_operation_owner(self, owner: bytes) -> bool:
        """Whether ``owner`` is a (non-default) operation owner."""
        owner = _key(owner)
        return owner != DEFAULT_PUBKEY and owner in self.operation_owners

    def validate_whitelist_mint(self, mint: bytes) -> bool:
        """Whether ``mint`` is a (non-default) whitelisted mint."""
        mint = _key(mint)
        return mint != DEFAULT_PUBKEY and mint in self.whitelist_mints

    def update_operation_owner(self, keys: Iterable[bytes]) -> None:
        """Add owners; the result is deduplicated and sorted.

        Raises ValueError if more than OPERATION_SIZE owners would remain.
        """
        owners = sorted(_merged(self.operation_owners, keys))
        self.operation_owners = _filled(owners, OPERATION_SIZE, "operation owners")

    def remove_operation_owner(self, keys: Iterable[bytes]) -> None:
        """Remove the given owners, keeping the order of the others."""
        owners = _without(self.operation_owners, keys)
        self.operation_owners = _filled(owners, OPERATION_SIZE, "operation owners")

    def update_whitelist_mint(self, keys: Iterable[bytes]) -> None:
        """Add mints to the whitelist without repeats.

        Raises ValueError if more than WHITE_MINT_SIZE mints would remain.
        """
        mints = _merged(self.whitelist_mints, keys)
        self.whitelist_mints = _filled(mints, WHITE_MINT_SIZE, "whitelist mints")

    def remove_whitelist_mint(self, keys: Iterable[bytes]) -> None:
        """Remove the given mints, keeping the order of the others."""
        mints = _without(self.whitelist_mints, keys)
        self.whitelist_mints = _filled(mints, WHITE_MINT_SIZE, "whitelist mints")

    def to_bytes(self) -> bytes:
        """Serialize to the packed account layout, discriminator included."""
        if len(self.operation_owners) != OPERATION_SIZE:
            raise ValueError(f"expected {OPERATION_SIZE} operation owners")
        if len(self.whitelist_mints) != WHITE_MINT_SIZE:
            raise ValueError(f"expected {WHITE_MINT_SIZE} whitelist mints")
        if not 0 <= self.bump <= 0xFF:
            raise ValueError(f"bump {self.bump} does not fit in one byte")
        return b"".join(
            [
                _DISCRIMINATOR,
                bytes([self.bump]),
                *(_key(k) for k in self.operation_owners),
                *(_key(k) for k in self.whitelist_mints),
            ]
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> OperationState:
        """Parse the packed account layout produced by :meth:`to_bytes`."""
        if len(data) != cls.LEN:
            raise ValueError(f"expected {cls.LEN} bytes, got {len(data)}")
        if bytes(data[:8]) != _DISCRIMINATOR:
            raise ValueError("account discriminator does not match OperationState")
        keys = [
            bytes(data[start : start + PUBKEY_LEN]) for start in range(9, cls.LEN, PUBKEY_LEN)
        ]
        return cls(
            bump=data[8],
            operation_owners=keys[:OPERATION_SIZE],
            whitelist_mints=keys[OPERATION_SIZE:],
        )