"""
In-memory account store for pool and stake records.

Records are frozen dataclasses; "mutation" replaces the stored record. The
store enforces existence/uniqueness; it does not interpret the records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..errors import AccountExistsError, AccountNotFoundError
from .pools import Pool, PoolId
from .stakes import StakeId, VestingStake


@dataclass
class AccountStore:
    """
    Mutable mapping of pool_id -> Pool and stake_id -> VestingStake.

    Closed stakes are kept so a second claim is rejected as already claimed
    rather than as unknown.
    """

    _pools: Dict[PoolId, Pool] = field(default_factory=dict)
    _stakes: Dict[StakeId, VestingStake] = field(default_factory=dict)

    def get_pool(self, pool_id: PoolId) -> Pool:
        try:
            return self._pools[pool_id]
        except KeyError:
            raise AccountNotFoundError(f"unknown pool: {pool_id}") from None

    def has_pool(self, pool_id: PoolId) -> bool:
        return pool_id in self._pools

    def create_pool(self, pool: Pool) -> None:
        if pool.pool_id in self._pools:
            raise AccountExistsError(f"pool already exists: {pool.pool_id}")
        self._pools[pool.pool_id] = pool

    def put_pool(self, pool: Pool) -> None:
        if pool.pool_id not in self._pools:
            raise AccountNotFoundError(f"unknown pool: {pool.pool_id}")
        self._pools[pool.pool_id] = pool

    def get_stake(self, stake_id: StakeId) -> VestingStake:
        try:
            return self._stakes[stake_id]
        except KeyError:
            raise AccountNotFoundError(f"unknown stake: {stake_id}") from None

    def has_stake(self, stake_id: StakeId) -> bool:
        return stake_id in self._stakes

    def create_stake(self, stake: VestingStake) -> None:
        sid = stake.stake_id
        if sid in self._stakes:
            raise AccountExistsError(f"stake already exists: {sid}")
        self._stakes[sid] = stake

    def put_stake(self, stake: VestingStake) -> None:
        sid = stake.stake_id
        if sid not in self._stakes:
            raise AccountNotFoundError(f"unknown stake: {sid}")
        self._stakes[sid] = stake

    def stakes_for_pool(self, pool_id: PoolId) -> List[VestingStake]:
        """Stakes of one pool in deposit order."""
        out = [s for s in self._stakes.values() if s.pool_id == pool_id]
        out.sort(key=lambda s: s.deposit_id)
        return out

    def __repr__(self) -> str:
        return f"AccountStore({len(self._pools)} pools, {len(self._stakes)} stakes)"
