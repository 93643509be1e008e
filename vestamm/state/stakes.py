"""
Vesting stake records.

One `VestingStake` is created per deposit. Its locked share units sit in an
escrow account (`vault_account`) derived from the same (pool, owner, deposit_id)
triple as the stake id, so identifiers are never reused.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidParameterError
from ..kernels.python.fixed_point import I64_MAX, I64_MIN, require_uint
from .canonical import derive_id
from .pools import AccountId, PoolId


StakeId = str


def compute_stake_id(pool_id: PoolId, owner: AccountId, deposit_id: int) -> StakeId:
    require_uint("deposit_id", deposit_id)
    return derive_id("vesting", pool_id, owner, deposit_id)


def compute_stake_vault(pool_id: PoolId, owner: AccountId, deposit_id: int) -> AccountId:
    require_uint("deposit_id", deposit_id)
    return derive_id("vesting_vault", pool_id, owner, deposit_id)


@dataclass(frozen=True)
class VestingStake:
    """
    A locked position of share units.

    `reward_debt` is `amount * acc_reward_per_share // scale` as of the last
    settlement; pending reward is the entitlement above it.
    """

    pool_id: PoolId
    owner: AccountId
    amount: int
    vesting_end: int
    deposit_id: int
    reward_debt: int = 0
    claimed: bool = False
    initial_amount: int = 0

    def __post_init__(self) -> None:
        require_uint("amount", self.amount)
        require_uint("deposit_id", self.deposit_id)
        require_uint("reward_debt", self.reward_debt, bits=128)
        require_uint("initial_amount", self.initial_amount)
        if not isinstance(self.vesting_end, int) or isinstance(self.vesting_end, bool):
            raise InvalidParameterError("vesting_end must be an int")
        if not (I64_MIN <= self.vesting_end <= I64_MAX):
            raise InvalidParameterError(f"vesting_end out of i64 range: {self.vesting_end}")
        if not isinstance(self.claimed, bool):
            raise InvalidParameterError("claimed must be a bool")
        if self.amount > self.initial_amount:
            raise InvalidParameterError(
                f"amount ({self.amount}) exceeds initial_amount ({self.initial_amount})"
            )

    @property
    def stake_id(self) -> StakeId:
        return compute_stake_id(self.pool_id, self.owner, self.deposit_id)

    @property
    def vault_account(self) -> AccountId:
        return compute_stake_vault(self.pool_id, self.owner, self.deposit_id)

    @property
    def is_open(self) -> bool:
        return not self.claimed and self.amount > 0
