"""
Vesting AMM engine (imperative shell).

Wraps the functional core in `vestamm.core.operations` with the collaborators it
needs: a transfer service (ledger), a clock and an account store.

Every public method follows the same discipline:

1. read the pool/stake records and the balances they depend on,
2. ask the core for a `Transition` (pure; raises `AmmError` on rejection),
3. hand all ledger effects to the transfer service as one atomic batch,
4. commit the new records and append the event.

A rejection at step 2 or 3 leaves records and balances untouched. Methods never
raise `AmmError`; they return a `StepResult`. Use `or_raise()` to get the
exception back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..config import AmmConfig
from ..core import operations as ops
from ..core.events import Claimed, EventLog, Event, Swapped, event_to_dict
from ..core.operations import PoolSnapshot, Transition
from ..core.rewards import pending_reward
from ..errors import AccountExistsError, AmmError, ErrorKind
from ..state.pools import AccountId, MintId, Pool, PoolId
from ..state.stakes import StakeId, VestingStake
from .ports import AccountStore, Clock, TransferService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Result of a single engine operation."""

    ok: bool
    pool: Optional[Pool] = None
    stake: Optional[VestingStake] = None
    event: Optional[Event] = None
    error: Optional[AmmError] = None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind


def or_raise(result: StepResult) -> StepResult:
    """Return `result` if it succeeded, otherwise raise the carried AmmError."""
    if result.ok:
        return result
    if result.error is None:
        raise RuntimeError("rejected StepResult without an error")
    raise result.error


class VestingAmm:
    """
    Operation surface of the vesting AMM.

    The host must serialize calls that touch the same pool or stake; the
    engine performs no locking of its own.
    """

    def __init__(
        self,
        *,
        ledger: TransferService,
        clock: Clock,
        store: AccountStore,
        config: Optional[AmmConfig] = None,
        events: Optional[EventLog] = None,
    ) -> None:
        self.ledger = ledger
        self.clock = clock
        self.store = store
        self.config = config if config is not None else AmmConfig()
        self.events = events if events is not None else EventLog()

    # -- reads ---------------------------------------------------------------

    def snapshot(self, pool_id: PoolId) -> PoolSnapshot:
        pool = self.store.get_pool(pool_id)
        return PoolSnapshot(
            pool=pool,
            reserve_a=self.ledger.balance_of(pool.reserve_a, pool.mint_a),
            reserve_b=self.ledger.balance_of(pool.reserve_b, pool.mint_b),
            share_supply=self.ledger.supply_of(pool.share_mint),
            reward_vault_balance=self.ledger.balance_of(pool.reward_vault, pool.share_mint),
        )

    def pending_reward(self, stake_id: StakeId) -> int:
        """Reward currently owed to an open stake (0 for closed stakes)."""
        stake = self.store.get_stake(stake_id)
        if not stake.is_open:
            return 0
        pool = self.store.get_pool(stake.pool_id)
        return pending_reward(
            stake.amount,
            stake.reward_debt,
            pool.acc_reward_per_share,
            scale=self.config.reward_scale,
        )

    # -- plumbing ------------------------------------------------------------

    def _run(self, op_name: str, plan: Callable[[], Transition], *, creates_pool: bool = False) -> StepResult:
        try:
            transition = plan()
            if creates_pool and self.store.has_pool(transition.pool.pool_id):
                raise AccountExistsError(f"pool already exists: {transition.pool.pool_id}")
            new_stake = transition.stake is not None and not self.store.has_stake(transition.stake.stake_id)

            self.ledger.execute(transition.effects)
        except AmmError as exc:
            logger.warning("%s rejected: %s", op_name, exc)
            return StepResult(ok=False, error=exc)

        if creates_pool:
            self.store.create_pool(transition.pool)
        else:
            self.store.put_pool(transition.pool)
        if transition.stake is not None:
            if new_stake:
                self.store.create_stake(transition.stake)
            else:
                self.store.put_stake(transition.stake)
        self.events.append(transition.event)

        logger.info("%s committed: %s", op_name, event_to_dict(transition.event))
        event = transition.event
        if isinstance(event, Claimed) and event.reward_paid < event.reward_pending:
            logger.warning(
                "reward vault short for pool %s: pending %s not paid to %s",
                event.pool,
                event.reward_pending,
                event.user,
            )
        if isinstance(event, Swapped) and event.reward_fee > 0:
            logger.debug(
                "acc_reward_per_share for pool %s now %s",
                event.pool,
                transition.pool.acc_reward_per_share,
            )
        return StepResult(ok=True, pool=transition.pool, stake=transition.stake, event=event)

    def _stake_and_snapshot(self, stake_id: StakeId) -> tuple[VestingStake, PoolSnapshot]:
        stake = self.store.get_stake(stake_id)
        return stake, self.snapshot(stake.pool_id)

    # -- operations ----------------------------------------------------------

    def initialize_pool(
        self,
        *,
        authority: AccountId,
        mint_a: MintId,
        mint_b: MintId,
        share_mint: MintId,
        treasury: AccountId,
        protocol_fee_bps: int,
        treasury_fee_bps: int,
        reward_fee_bps: int,
        reserve_a: Optional[AccountId] = None,
        reserve_b: Optional[AccountId] = None,
        reward_vault: Optional[AccountId] = None,
    ) -> StepResult:
        return self._run(
            "initialize_pool",
            lambda: ops.initialize_pool(
                authority=authority,
                mint_a=mint_a,
                mint_b=mint_b,
                share_mint=share_mint,
                treasury=treasury,
                protocol_fee_bps=protocol_fee_bps,
                treasury_fee_bps=treasury_fee_bps,
                reward_fee_bps=reward_fee_bps,
                reserve_a=reserve_a,
                reserve_b=reserve_b,
                reward_vault=reward_vault,
            ),
            creates_pool=True,
        )

    def deposit_and_vest(
        self,
        *,
        pool_id: PoolId,
        user: AccountId,
        amount_a: int,
        amount_b: int,
        vesting_seconds: int,
    ) -> StepResult:
        def plan() -> Transition:
            t = ops.deposit_and_vest(
                self.snapshot(pool_id),
                user=user,
                amount_a=amount_a,
                amount_b=amount_b,
                vesting_seconds=vesting_seconds,
                now=self.clock.now(),
                config=self.config,
            )
            if t.stake is not None and self.store.has_stake(t.stake.stake_id):
                raise AccountExistsError(f"stake already exists: {t.stake.stake_id}")
            return t

        return self._run("deposit_and_vest", plan)

    def claim_vested(self, *, stake_id: StakeId, user: AccountId) -> StepResult:
        def plan() -> Transition:
            stake, snap = self._stake_and_snapshot(stake_id)
            return ops.claim_vested(snap, stake, user=user, now=self.clock.now(), config=self.config)

        return self._run("claim_vested", plan)

    def early_unvest(
        self,
        *,
        stake_id: StakeId,
        user: AccountId,
        share_amount: int,
        penalty_bps: int,
    ) -> StepResult:
        def plan() -> Transition:
            stake, snap = self._stake_and_snapshot(stake_id)
            return ops.early_unvest(
                snap,
                stake,
                user=user,
                share_amount=share_amount,
                penalty_bps=penalty_bps,
                config=self.config,
            )

        return self._run("early_unvest", plan)

    def withdraw_unlocked(self, *, pool_id: PoolId, user: AccountId, share_amount: int) -> StepResult:
        return self._run(
            "withdraw_unlocked",
            lambda: ops.withdraw_unlocked(self.snapshot(pool_id), user=user, share_amount=share_amount),
        )

    def swap(
        self,
        *,
        pool_id: PoolId,
        user: AccountId,
        amount_in: int,
        minimum_amount_out: int,
        a_to_b: bool,
        min_slot: Optional[int] = None,
    ) -> StepResult:
        return self._run(
            "swap",
            lambda: ops.swap(
                self.snapshot(pool_id),
                user=user,
                amount_in=amount_in,
                minimum_amount_out=minimum_amount_out,
                a_to_b=a_to_b,
                current_slot=self.clock.current_ordering_counter(),
                min_slot=min_slot,
                config=self.config,
            ),
        )

    def pause(self, *, pool_id: PoolId, authority: AccountId) -> StepResult:
        return self._run("pause", lambda: ops.pause(self.store.get_pool(pool_id), authority=authority))

    def unpause(self, *, pool_id: PoolId, authority: AccountId) -> StepResult:
        return self._run("unpause", lambda: ops.unpause(self.store.get_pool(pool_id), authority=authority))

    def emergency_withdraw(self, *, pool_id: PoolId, authority: AccountId) -> StepResult:
        return self._run(
            "emergency_withdraw",
            lambda: ops.emergency_withdraw(self.snapshot(pool_id), authority=authority),
        )


__all__ = ["StepResult", "VestingAmm", "or_raise"]
