"""
Pool operations (functional core).

Each operation takes a `PoolSnapshot` (pool record plus the ledger balances it
depends on, all read before the call) and returns a `Transition`:

    (next pool record, next stake record or None, ledger effects, event)

Nothing here mutates state. The shell applies the effects atomically and only
then commits the records, so a rejected operation or a failed transfer batch
leaves no trace.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..config import AmmConfig
from ..errors import InvalidParameterError, PausedError, SlotTooLowError, UnauthorizedError
from ..kernels.python.cpmm_swap import swap_exact_in
from ..kernels.python.fixed_point import checked_add, require_uint
from ..kernels.python.lp_shares import mint_amount, withdraw_amounts
from ..state.pools import AccountId, MintId, Pool, compute_pool_id, derive_pool_account, validate_fee_split
from ..state.stakes import VestingStake
from .effects import Burn, LedgerEffect, MintTo, SetMintAuthority, Transfer, transfer_if_positive
from .events import (
    Claimed,
    Deposited,
    EarlyUnvested,
    EmergencyWithdrawn,
    Event,
    Paused,
    PoolInitialized,
    Swapped,
    Unpaused,
    Withdrawn,
)
from .rewards import accrue
from .vesting import create_stake, plan_claim, plan_early_exit, validate_lock_seconds


@dataclass(frozen=True)
class PoolSnapshot:
    """Pool record plus the balances an operation reads, captured together."""

    pool: Pool
    reserve_a: int = 0
    reserve_b: int = 0
    share_supply: int = 0
    reward_vault_balance: int = 0

    def __post_init__(self) -> None:
        for name in ("reserve_a", "reserve_b", "share_supply", "reward_vault_balance"):
            require_uint(name, getattr(self, name))


@dataclass(frozen=True)
class Transition:
    pool: Pool
    effects: Tuple[LedgerEffect, ...]
    event: Event
    stake: Optional[VestingStake] = None


def require_account(name: str, value: AccountId) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidParameterError(f"{name} must be a non-empty string: {value!r}")


def require_not_paused(pool: Pool) -> None:
    if pool.paused:
        raise PausedError(f"pool {pool.pool_id} is paused")


def require_authority(pool: Pool, signer: AccountId) -> None:
    if signer != pool.authority:
        raise UnauthorizedError(f"{signer} is not the pool authority")


def require_owner(stake: VestingStake, signer: AccountId) -> None:
    if signer != stake.owner:
        raise UnauthorizedError(f"{signer} does not own stake {stake.deposit_id}")


# ---------------------------------------------------------------------------
# initialize_pool
# ---------------------------------------------------------------------------


def initialize_pool(
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
) -> Transition:
    """
    Create the pool record and hand share-mint authority to the pool.

    Pool-owned accounts default to ids derived from the pool id.
    """
    for name, value in (
        ("authority", authority),
        ("mint_a", mint_a),
        ("mint_b", mint_b),
        ("share_mint", share_mint),
        ("treasury", treasury),
    ):
        require_account(name, value)
    validate_fee_split(protocol_fee_bps, treasury_fee_bps, reward_fee_bps)

    pool_id = compute_pool_id(share_mint)
    pool = Pool(
        pool_id=pool_id,
        authority=authority,
        mint_a=mint_a,
        mint_b=mint_b,
        share_mint=share_mint,
        reserve_a=reserve_a or derive_pool_account(pool_id, "reserve_a"),
        reserve_b=reserve_b or derive_pool_account(pool_id, "reserve_b"),
        treasury=treasury,
        reward_vault=reward_vault or derive_pool_account(pool_id, "reward_vault"),
        protocol_fee_bps=protocol_fee_bps,
        treasury_fee_bps=treasury_fee_bps,
        reward_fee_bps=reward_fee_bps,
    )
    effects = (
        SetMintAuthority(mint=share_mint, current_authority=authority, new_authority=pool_id),
    )
    event = PoolInitialized(
        pool=pool_id,
        authority=authority,
        treasury=treasury,
        protocol_fee_bps=protocol_fee_bps,
        treasury_fee_bps=treasury_fee_bps,
        reward_fee_bps=reward_fee_bps,
    )
    return Transition(pool=pool, effects=effects, event=event)


# ---------------------------------------------------------------------------
# deposit_and_vest
# ---------------------------------------------------------------------------


def deposit_and_vest(
    snap: PoolSnapshot,
    *,
    user: AccountId,
    amount_a: int,
    amount_b: int,
    vesting_seconds: int,
    now: int,
    config: AmmConfig,
) -> Transition:
    """
    Deposit A+B, mint shares into a fresh stake's escrow, lock until `now + vesting_seconds`.

    Shares are priced against the reserves before this deposit.
    """
    pool = snap.pool
    require_not_paused(pool)
    require_account("user", user)
    validate_lock_seconds(vesting_seconds, config)

    shares = mint_amount(
        amount_a=amount_a,
        amount_b=amount_b,
        reserve_a=snap.reserve_a,
        reserve_b=snap.reserve_b,
        current_supply=snap.share_supply,
    )
    stake = create_stake(
        pool_id=pool.pool_id,
        owner=user,
        amount=shares,
        lock_seconds=vesting_seconds,
        now=now,
        deposit_id=pool.vesting_nonce,
        acc_reward_per_share=pool.acc_reward_per_share,
        config=config,
    )
    next_pool = replace(pool, vesting_nonce=checked_add(pool.vesting_nonce, 1))

    effects: Tuple[LedgerEffect, ...] = (
        Transfer(mint=pool.mint_a, source=user, destination=pool.reserve_a, amount=amount_a),
        Transfer(mint=pool.mint_b, source=user, destination=pool.reserve_b, amount=amount_b),
        MintTo(mint=pool.share_mint, destination=stake.vault_account, amount=shares, authority=pool.pool_id),
    )
    event = Deposited(
        pool=pool.pool_id,
        user=user,
        amount_a=amount_a,
        amount_b=amount_b,
        amount=shares,
        vesting_end=stake.vesting_end,
        deposit_id=stake.deposit_id,
    )
    return Transition(pool=next_pool, effects=effects, event=event, stake=stake)


# ---------------------------------------------------------------------------
# claim_vested / early_unvest
# ---------------------------------------------------------------------------


def claim_vested(
    snap: PoolSnapshot,
    stake: VestingStake,
    *,
    user: AccountId,
    now: int,
    config: AmmConfig,
) -> Transition:
    pool = snap.pool
    require_not_paused(pool)
    require_account("user", user)
    require_owner(stake, user)

    plan = plan_claim(
        stake,
        now=now,
        acc_reward_per_share=pool.acc_reward_per_share,
        reward_vault_balance=snap.reward_vault_balance,
        config=config,
    )
    effects = transfer_if_positive(pool.share_mint, stake.vault_account, user, plan.principal)
    effects += transfer_if_positive(pool.share_mint, pool.reward_vault, user, plan.reward.paid)

    event = Claimed(
        pool=pool.pool_id,
        user=user,
        amount=plan.principal,
        reward_paid=plan.reward.paid,
        reward_pending=plan.reward.pending,
    )
    return Transition(pool=pool, effects=effects, event=event, stake=plan.stake_after)


def early_unvest(
    snap: PoolSnapshot,
    stake: VestingStake,
    *,
    user: AccountId,
    share_amount: int,
    penalty_bps: int,
    config: AmmConfig,
) -> Transition:
    pool = snap.pool
    require_not_paused(pool)
    require_account("user", user)
    require_owner(stake, user)

    plan = plan_early_exit(
        stake,
        requested_amount=share_amount,
        penalty_bps=penalty_bps,
        acc_reward_per_share=pool.acc_reward_per_share,
        reward_vault_balance=snap.reward_vault_balance,
        config=config,
    )
    effects = transfer_if_positive(pool.share_mint, stake.vault_account, pool.treasury, plan.penalty)
    effects += transfer_if_positive(pool.share_mint, stake.vault_account, user, plan.to_owner)
    reward_paid = 0
    if plan.reward is not None:
        reward_paid = plan.reward.paid
        effects += transfer_if_positive(pool.share_mint, pool.reward_vault, user, reward_paid)

    event = EarlyUnvested(
        pool=pool.pool_id,
        user=user,
        amount_unvested=plan.requested,
        penalty=plan.penalty,
        remaining=plan.stake_after.amount,
        reward_paid=reward_paid,
    )
    return Transition(pool=pool, effects=effects, event=event, stake=plan.stake_after)


# ---------------------------------------------------------------------------
# withdraw_unlocked
# ---------------------------------------------------------------------------


def withdraw_unlocked(snap: PoolSnapshot, *, user: AccountId, share_amount: int) -> Transition:
    """Burn freely-held shares for a proportional slice of both reserves."""
    pool = snap.pool
    require_not_paused(pool)
    require_account("user", user)

    out = withdraw_amounts(
        share_amount=share_amount,
        reserve_a=snap.reserve_a,
        reserve_b=snap.reserve_b,
        total_supply=snap.share_supply,
    )
    effects: Tuple[LedgerEffect, ...] = (Burn(mint=pool.share_mint, source=user, amount=share_amount),)
    effects += transfer_if_positive(pool.mint_a, pool.reserve_a, user, out.amount_a)
    effects += transfer_if_positive(pool.mint_b, pool.reserve_b, user, out.amount_b)

    event = Withdrawn(
        pool=pool.pool_id,
        user=user,
        lp_amount=share_amount,
        amount_a=out.amount_a,
        amount_b=out.amount_b,
    )
    return Transition(pool=pool, effects=effects, event=event)


# ---------------------------------------------------------------------------
# swap
# ---------------------------------------------------------------------------


def swap(
    snap: PoolSnapshot,
    *,
    user: AccountId,
    amount_in: int,
    minimum_amount_out: int,
    a_to_b: bool,
    current_slot: int,
    config: AmmConfig,
    min_slot: Optional[int] = None,
) -> Transition:
    """
    Exact-in constant-product swap.

    The reward part of the fee stays in the reserves and is credited to share
    holders through the accumulator, using the share supply captured in `snap`.
    """
    pool = snap.pool
    require_not_paused(pool)
    require_account("user", user)
    if not isinstance(a_to_b, bool):
        raise InvalidParameterError(f"a_to_b must be a bool: {a_to_b!r}")
    if min_slot is not None and current_slot < require_uint("min_slot", min_slot):
        raise SlotTooLowError(f"current slot {current_slot} < min_slot {min_slot}")

    (in_account, in_mint), (out_account, out_mint) = pool.reserves_for(a_to_b)
    reserve_in, reserve_out = (snap.reserve_a, snap.reserve_b) if a_to_b else (snap.reserve_b, snap.reserve_a)

    result = swap_exact_in(
        amount_in=amount_in,
        minimum_amount_out=minimum_amount_out,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        protocol_fee_bps=pool.protocol_fee_bps,
        treasury_fee_bps=pool.treasury_fee_bps,
        reward_fee_bps=pool.reward_fee_bps,
    )
    next_acc = accrue(
        pool.acc_reward_per_share,
        reward_fee=result.fees.reward_fee,
        share_supply=snap.share_supply,
        scale=config.reward_scale,
    )

    effects: Tuple[LedgerEffect, ...] = (
        Transfer(mint=in_mint, source=user, destination=in_account, amount=amount_in),
        Transfer(mint=out_mint, source=out_account, destination=user, amount=result.amount_out),
    )
    effects += transfer_if_positive(in_mint, in_account, pool.treasury, result.fees.treasury_fee)

    event = Swapped(
        pool=pool.pool_id,
        user=user,
        amount_in=amount_in,
        amount_out=result.amount_out,
        is_a_to_b=a_to_b,
        treasury_fee=result.fees.treasury_fee,
        reward_fee=result.fees.reward_fee,
    )
    return Transition(pool=replace(pool, acc_reward_per_share=next_acc), effects=effects, event=event)


# ---------------------------------------------------------------------------
# admin
# ---------------------------------------------------------------------------


def pause(pool: Pool, *, authority: AccountId) -> Transition:
    require_authority(pool, authority)
    return Transition(pool=pool.with_paused(True), effects=(), event=Paused(pool=pool.pool_id))


def unpause(pool: Pool, *, authority: AccountId) -> Transition:
    require_authority(pool, authority)
    return Transition(pool=pool.with_paused(False), effects=(), event=Unpaused(pool=pool.pool_id))


def emergency_withdraw(snap: PoolSnapshot, *, authority: AccountId) -> Transition:
    """
    Sweep both reserves to the treasury.

    Bypasses the pause gate and all share accounting; after this the pool's
    reserves no longer back its share supply.
    """
    pool = snap.pool
    require_authority(pool, authority)
    effects = transfer_if_positive(pool.mint_a, pool.reserve_a, pool.treasury, snap.reserve_a)
    effects += transfer_if_positive(pool.mint_b, pool.reserve_b, pool.treasury, snap.reserve_b)
    event = EmergencyWithdrawn(pool=pool.pool_id, amount_a=snap.reserve_a, amount_b=snap.reserve_b)
    return Transition(pool=pool, effects=effects, event=event)
