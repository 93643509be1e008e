"""
Collaborator contracts consumed by the engine.

The in-memory implementations live in `vestamm.state.ledger`,
`vestamm.state.store` and `vestamm.integration.clock`; a host can substitute
anything that satisfies these protocols.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol

from ..core.effects import LedgerEffect
from ..state.pools import AccountId, MintId, Pool, PoolId
from ..state.stakes import StakeId, VestingStake


class TransferService(Protocol):
    def balance_of(self, account: AccountId, mint: MintId) -> int: ...

    def supply_of(self, mint: MintId) -> int: ...

    def execute(self, effects: Iterable[LedgerEffect]) -> None:
        """Apply all effects or none; raise TransferError on failure."""
        ...


class Clock(Protocol):
    def now(self) -> int:
        """Unix timestamp in seconds."""
        ...

    def current_ordering_counter(self) -> int:
        """Monotonic slot/height used by the swap `min_slot` guard."""
        ...


class AccountStore(Protocol):
    def get_pool(self, pool_id: PoolId) -> Pool: ...

    def create_pool(self, pool: Pool) -> None: ...

    def put_pool(self, pool: Pool) -> None: ...

    def get_stake(self, stake_id: StakeId) -> VestingStake: ...

    def create_stake(self, stake: VestingStake) -> None: ...

    def put_stake(self, stake: VestingStake) -> None: ...

    def has_pool(self, pool_id: PoolId) -> bool: ...

    def has_stake(self, stake_id: StakeId) -> bool: ...

    def stakes_for_pool(self, pool_id: PoolId) -> List[VestingStake]: ...
