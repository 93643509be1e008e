"""
Pool record for a two-asset vesting pool.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from ..errors import InvalidFeeSplitError, InvalidParameterError
from ..kernels.python.fixed_point import BPS_DENOM, U16_MAX, require_uint
from .canonical import derive_id


# Type aliases
AccountId = str
MintId = str
PoolId = str


def compute_pool_id(share_mint: MintId) -> PoolId:
    """One pool per share mint: pool_id = H("pool" || share_mint)."""
    if not isinstance(share_mint, str) or not share_mint:
        raise InvalidParameterError("share_mint must be a non-empty string")
    return derive_id("pool", share_mint)


def derive_pool_account(pool_id: PoolId, role: str) -> AccountId:
    """Default account id for a pool-owned account ("reserve_a", "reward_vault", ...)."""
    return derive_id("pool_account", pool_id, role)


def validate_fee_split(protocol_fee_bps: int, treasury_fee_bps: int, reward_fee_bps: int) -> None:
    """
    Require `treasury_fee_bps + reward_fee_bps <= protocol_fee_bps <= 10_000`.
    """
    for name, v in (
        ("protocol_fee_bps", protocol_fee_bps),
        ("treasury_fee_bps", treasury_fee_bps),
        ("reward_fee_bps", reward_fee_bps),
    ):
        if not isinstance(v, int) or isinstance(v, bool) or not (0 <= v <= U16_MAX):
            raise InvalidFeeSplitError(f"{name} must be a u16: {v!r}")
    if protocol_fee_bps > BPS_DENOM:
        raise InvalidFeeSplitError(f"protocol_fee_bps must be <= {BPS_DENOM}: {protocol_fee_bps}")
    if treasury_fee_bps + reward_fee_bps > protocol_fee_bps:
        raise InvalidFeeSplitError(
            f"treasury_fee_bps + reward_fee_bps ({treasury_fee_bps} + {reward_fee_bps}) "
            f"> protocol_fee_bps ({protocol_fee_bps})"
        )


@dataclass(frozen=True)
class Pool:
    """
    State of one vesting pool.

    Balances are not stored here: `reserve_a`, `reserve_b`, `treasury` and
    `reward_vault` are account ids whose balances live in the ledger.

    Attributes:
        pool_id: Deterministic id derived from `share_mint`
        authority: Admin identity (pause/unpause/emergency_withdraw)
        mint_a, mint_b: Traded asset mints
        share_mint: Mint of the pool-share ("LP") units
        reserve_a, reserve_b: Reserve accounts holding mint_a / mint_b
        treasury: Account receiving treasury fees, penalties and emergency sweeps
        reward_vault: Account holding share units paid out as rewards
        protocol_fee_bps: Total swap fee in basis points of trade size
        treasury_fee_bps, reward_fee_bps: Parts of the protocol fee
        vesting_nonce: Next deposit id (monotonic, gap-free)
        paused: Administrative gate for all mutating user operations
        acc_reward_per_share: Cumulative reward per share unit, scaled
    """

    pool_id: PoolId
    authority: AccountId
    mint_a: MintId
    mint_b: MintId
    share_mint: MintId
    reserve_a: AccountId
    reserve_b: AccountId
    treasury: AccountId
    reward_vault: AccountId
    protocol_fee_bps: int
    treasury_fee_bps: int
    reward_fee_bps: int
    vesting_nonce: int = 0
    paused: bool = False
    acc_reward_per_share: int = 0

    def __post_init__(self) -> None:
        validate_fee_split(self.protocol_fee_bps, self.treasury_fee_bps, self.reward_fee_bps)
        require_uint("vesting_nonce", self.vesting_nonce, bits=64)
        require_uint("acc_reward_per_share", self.acc_reward_per_share, bits=128)
        if not isinstance(self.paused, bool):
            raise InvalidParameterError("paused must be a bool")
        if self.mint_a == self.mint_b:
            raise InvalidParameterError(f"pool mints must differ: {self.mint_a}")
        if self.share_mint in (self.mint_a, self.mint_b):
            raise InvalidParameterError("share_mint must differ from the traded mints")

    def reserves_for(self, a_to_b: bool) -> Tuple[Tuple[AccountId, MintId], Tuple[AccountId, MintId]]:
        """((in_account, in_mint), (out_account, out_mint)) for a swap direction."""
        a = (self.reserve_a, self.mint_a)
        b = (self.reserve_b, self.mint_b)
        return (a, b) if a_to_b else (b, a)

    def with_paused(self, paused: bool) -> "Pool":
        return replace(self, paused=paused)

    def __repr__(self) -> str:
        return (
            f"Pool(pool_id={self.pool_id[:16]}..., "
            f"fees=({self.protocol_fee_bps}/{self.treasury_fee_bps}/{self.reward_fee_bps}), "
            f"nonce={self.vesting_nonce}, paused={self.paused}, "
            f"acc={self.acc_reward_per_share})"
        )
