"""
Vesting ledger: state machine for a single locked position.

    LOCKED --early_exit(partial)--> PARTIALLY_WITHDRAWN --early_exit(rest)--> CLOSED
       |                                   |
       +------------claim (matured)--------+-------------------------------> CLOSED

Functions here are pure: they validate a stake against the given clock/pool
values and return the planned outcome. They never touch balances.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, unique
from typing import Optional

from ..config import AmmConfig
from ..errors import (
    AlreadyClaimedError,
    InsufficientVestedAmountError,
    InvalidPenaltyError,
    InvalidVestingPeriodError,
    VestingNotFinishedError,
)
from ..kernels.python.fixed_point import BPS_DENOM, checked_add_i64, checked_sub, mul_div_floor, require_uint
from ..state.pools import AccountId, PoolId
from ..state.stakes import VestingStake
from .rewards import RewardSettlement, reward_entitlement, settle


@unique
class VestingStatus(Enum):
    LOCKED = "Locked"
    PARTIALLY_WITHDRAWN = "PartiallyWithdrawn"
    CLOSED = "Closed"


def stake_status(stake: VestingStake) -> VestingStatus:
    if not stake.is_open:
        return VestingStatus.CLOSED
    if stake.amount < stake.initial_amount:
        return VestingStatus.PARTIALLY_WITHDRAWN
    return VestingStatus.LOCKED


def is_matured(stake: VestingStake, now: int) -> bool:
    return now >= stake.vesting_end


def validate_lock_seconds(lock_seconds: int, config: AmmConfig) -> None:
    if not isinstance(lock_seconds, int) or isinstance(lock_seconds, bool):
        raise InvalidVestingPeriodError(f"lock_seconds must be an int: {lock_seconds!r}")
    if not (config.min_vesting_seconds <= lock_seconds <= config.max_vesting_seconds):
        raise InvalidVestingPeriodError(
            f"lock_seconds must be in [{config.min_vesting_seconds}, "
            f"{config.max_vesting_seconds}]: {lock_seconds}"
        )


def create_stake(
    *,
    pool_id: PoolId,
    owner: AccountId,
    amount: int,
    lock_seconds: int,
    now: int,
    deposit_id: int,
    acc_reward_per_share: int,
    config: AmmConfig,
) -> VestingStake:
    """
    New LOCKED stake with zero pending reward.

    The caller is responsible for bumping the pool nonce past `deposit_id`.
    """
    validate_lock_seconds(lock_seconds, config)
    require_uint("amount", amount)
    return VestingStake(
        pool_id=pool_id,
        owner=owner,
        amount=amount,
        vesting_end=checked_add_i64(now, lock_seconds),
        deposit_id=deposit_id,
        reward_debt=reward_entitlement(amount, acc_reward_per_share, scale=config.reward_scale),
        claimed=False,
        initial_amount=amount,
    )


@dataclass(frozen=True)
class ClaimPlan:
    principal: int
    reward: RewardSettlement
    stake_after: VestingStake


def plan_claim(
    stake: VestingStake,
    *,
    now: int,
    acc_reward_per_share: int,
    reward_vault_balance: int,
    config: AmmConfig,
) -> ClaimPlan:
    """
    Matured claim: return the full amount, settle reward, close the stake.

    A short reward vault skips the reward payout; the principal is still returned.
    """
    if stake.claimed:
        raise AlreadyClaimedError(f"stake {stake.deposit_id} already claimed")
    if not is_matured(stake, now):
        raise VestingNotFinishedError(f"vesting ends at {stake.vesting_end}, now {now}")

    reward = settle(
        pre_amount=stake.amount,
        post_amount=stake.amount,
        reward_debt=stake.reward_debt,
        acc_reward_per_share=acc_reward_per_share,
        vault_balance=reward_vault_balance,
        scale=config.reward_scale,
    )
    stake_after = replace(stake, claimed=True, reward_debt=reward.reward_debt)
    return ClaimPlan(principal=stake.amount, reward=reward, stake_after=stake_after)


@dataclass(frozen=True)
class EarlyExitPlan:
    requested: int
    penalty: int
    to_owner: int
    stake_after: VestingStake
    reward: Optional[RewardSettlement] = None


def plan_early_exit(
    stake: VestingStake,
    *,
    requested_amount: int,
    penalty_bps: int,
    acc_reward_per_share: int,
    reward_vault_balance: int,
    config: AmmConfig,
) -> EarlyExitPlan:
    """
    Release `requested_amount` before maturity, minus a penalty to the treasury.

    A zero request moves no share units and leaves the amount unchanged.

    Unless `config.settle_reward_on_early_exit` is set, reward accrued on the
    withdrawn amount is not paid and `reward_debt` is left unchanged.
    """
    if not isinstance(penalty_bps, int) or isinstance(penalty_bps, bool) or not (0 <= penalty_bps <= BPS_DENOM):
        raise InvalidPenaltyError(f"penalty_bps must be in [0, {BPS_DENOM}]: {penalty_bps!r}")
    if stake.claimed:
        raise AlreadyClaimedError(f"stake {stake.deposit_id} already closed")
    require_uint("requested_amount", requested_amount)
    if requested_amount > stake.amount:
        raise InsufficientVestedAmountError(
            f"requested {requested_amount}, locked {stake.amount}"
        )

    penalty = mul_div_floor(requested_amount, penalty_bps, BPS_DENOM)
    to_owner = checked_sub(requested_amount, penalty)
    remaining = checked_sub(stake.amount, requested_amount)

    reward: Optional[RewardSettlement] = None
    reward_debt = stake.reward_debt
    if config.settle_reward_on_early_exit:
        reward = settle(
            pre_amount=stake.amount,
            post_amount=remaining,
            reward_debt=stake.reward_debt,
            acc_reward_per_share=acc_reward_per_share,
            vault_balance=reward_vault_balance,
            scale=config.reward_scale,
        )
        reward_debt = reward.reward_debt

    stake_after = replace(
        stake,
        amount=remaining,
        claimed=remaining == 0,
        reward_debt=reward_debt,
    )
    return EarlyExitPlan(
        requested=requested_amount,
        penalty=penalty,
        to_owner=to_owner,
        stake_after=stake_after,
        reward=reward,
    )
