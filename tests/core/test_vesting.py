"""Tests for vestamm/core/vesting.py: lock window, claim and early exit plans."""

from __future__ import annotations

from dataclasses import replace

import pytest

from vestamm.config import SECONDS_PER_DAY, AmmConfig
from vestamm.core.vesting import (
    VestingStatus,
    create_stake,
    is_matured,
    plan_claim,
    plan_early_exit,
    stake_status,
    validate_lock_seconds,
)
from vestamm.errors import (
    AlreadyClaimedError,
    InsufficientVestedAmountError,
    InvalidPenaltyError,
    InvalidVestingPeriodError,
    VestingNotFinishedError,
)
from vestamm.state.stakes import VestingStake

CONFIG = AmmConfig()
NOW = 1_000
LOCK = 30 * SECONDS_PER_DAY


def _stake(amount: int = 500, acc: int = 10**10) -> VestingStake:
    return create_stake(
        pool_id="pool",
        owner="alice",
        amount=amount,
        lock_seconds=LOCK,
        now=NOW,
        deposit_id=0,
        acc_reward_per_share=acc,
        config=CONFIG,
    )


# ---------------------------------------------------------------------------
# lock window
# ---------------------------------------------------------------------------


class TestLockWindow:
    @pytest.mark.parametrize("days", [30, 90, 180])
    def test_accepts_bounds(self, days):
        validate_lock_seconds(days * SECONDS_PER_DAY, CONFIG)

    @pytest.mark.parametrize("seconds", [30 * SECONDS_PER_DAY - 1, 180 * SECONDS_PER_DAY + 1, 0, -1])
    def test_rejects_outside_window(self, seconds):
        with pytest.raises(InvalidVestingPeriodError):
            validate_lock_seconds(seconds, CONFIG)

    def test_rejects_non_int(self):
        with pytest.raises(InvalidVestingPeriodError):
            validate_lock_seconds(2_592_000.0, CONFIG)

    def test_custom_window(self):
        cfg = AmmConfig(min_vesting_seconds=1, max_vesting_seconds=10)
        validate_lock_seconds(10, cfg)
        with pytest.raises(InvalidVestingPeriodError):
            validate_lock_seconds(11, cfg)


# ---------------------------------------------------------------------------
# create_stake
# ---------------------------------------------------------------------------


class TestCreateStake:
    def test_fields(self):
        s = _stake()
        assert s.vesting_end == NOW + LOCK
        assert s.reward_debt == 5
        assert s.initial_amount == 500
        assert not s.claimed
        assert stake_status(s) is VestingStatus.LOCKED

    def test_maturity_is_inclusive(self):
        s = _stake()
        assert not is_matured(s, s.vesting_end - 1)
        assert is_matured(s, s.vesting_end)


# ---------------------------------------------------------------------------
# claim
# ---------------------------------------------------------------------------


class TestPlanClaim:
    def test_before_maturity_is_rejected(self):
        s = _stake()
        with pytest.raises(VestingNotFinishedError):
            plan_claim(s, now=s.vesting_end - 1, acc_reward_per_share=10**10, reward_vault_balance=0, config=CONFIG)

    def test_matured_claim_closes_and_pays_reward(self):
        s = _stake()
        plan = plan_claim(
            s, now=s.vesting_end, acc_reward_per_share=2 * 10**10, reward_vault_balance=100, config=CONFIG
        )
        assert plan.principal == 500
        assert plan.reward.pending == 5
        assert plan.reward.paid == 5
        assert plan.stake_after.claimed
        assert plan.stake_after.reward_debt == 10
        assert stake_status(plan.stake_after) is VestingStatus.CLOSED

    def test_short_vault_still_returns_principal(self):
        s = _stake()
        plan = plan_claim(
            s, now=s.vesting_end, acc_reward_per_share=2 * 10**10, reward_vault_balance=0, config=CONFIG
        )
        assert plan.principal == 500
        assert plan.reward.paid == 0
        assert plan.stake_after.claimed

    def test_double_claim_is_rejected(self):
        s = replace(_stake(), claimed=True)
        with pytest.raises(AlreadyClaimedError):
            plan_claim(s, now=s.vesting_end, acc_reward_per_share=0, reward_vault_balance=0, config=CONFIG)


# ---------------------------------------------------------------------------
# early exit
# ---------------------------------------------------------------------------


def _exit(stake: VestingStake, requested: int, penalty_bps: int, config: AmmConfig = CONFIG, vault: int = 0):
    return plan_early_exit(
        stake,
        requested_amount=requested,
        penalty_bps=penalty_bps,
        acc_reward_per_share=2 * 10**10,
        reward_vault_balance=vault,
        config=config,
    )


class TestPlanEarlyExit:
    def test_zero_penalty_returns_everything_requested(self):
        plan = _exit(_stake(), 200, 0)
        assert (plan.penalty, plan.to_owner) == (0, 200)
        assert plan.stake_after.amount == 300
        assert stake_status(plan.stake_after) is VestingStatus.PARTIALLY_WITHDRAWN

    def test_full_penalty_sends_everything_to_treasury(self):
        plan = _exit(_stake(), 200, 10_000)
        assert (plan.penalty, plan.to_owner) == (200, 0)

    def test_penalty_floors(self):
        plan = _exit(_stake(), 333, 2500)
        assert plan.penalty == 83
        assert plan.to_owner == 250

    def test_exiting_everything_closes_the_stake(self):
        plan = _exit(_stake(), 500, 100)
        assert plan.stake_after.amount == 0
        assert plan.stake_after.claimed
        assert stake_status(plan.stake_after) is VestingStatus.CLOSED

    def test_rejects_more_than_locked(self):
        with pytest.raises(InsufficientVestedAmountError):
            _exit(_stake(), 501, 0)

    def test_zero_request_is_a_noop(self):
        stake = _stake()
        plan = _exit(stake, 0, 100)
        assert (plan.requested, plan.penalty, plan.to_owner) == (0, 0, 0)
        assert plan.stake_after == stake
        assert stake_status(plan.stake_after) is VestingStatus.LOCKED

    def test_rejects_penalty_above_denominator(self):
        with pytest.raises(InvalidPenaltyError):
            _exit(_stake(), 100, 10_001)

    def test_rejects_closed_stake(self):
        closed = _exit(_stake(), 500, 0).stake_after
        with pytest.raises(AlreadyClaimedError):
            _exit(closed, 1, 0)

    def test_reward_not_settled_by_default(self):
        plan = _exit(_stake(), 200, 0)
        assert plan.reward is None
        assert plan.stake_after.reward_debt == 5

    def test_reward_settled_when_configured(self):
        cfg = AmmConfig(settle_reward_on_early_exit=True)
        plan = _exit(_stake(), 200, 0, config=cfg, vault=10)
        assert plan.reward is not None
        assert plan.reward.pending == 5
        assert plan.reward.paid == 5
        assert plan.stake_after.reward_debt == 300 * 2 * 10**10 // cfg.reward_scale
