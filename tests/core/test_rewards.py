# [TESTER] v1

from __future__ import annotations

from vestamm.core.rewards import REWARD_SCALE, accrue, pending_reward, reward_entitlement, settle


def test_accrue_spreads_reward_over_supply() -> None:
    assert accrue(0, reward_fee=10, share_supply=1000) == 10 * REWARD_SCALE // 1000
    assert accrue(7, reward_fee=10, share_supply=1000) == 7 + 10 * REWARD_SCALE // 1000


def test_accrue_is_noop_without_supply_or_reward() -> None:
    assert accrue(123, reward_fee=10, share_supply=0) == 123
    assert accrue(123, reward_fee=0, share_supply=1000) == 123


def test_accrue_with_custom_scale() -> None:
    assert accrue(0, reward_fee=3, share_supply=2, scale=100) == 150


def test_pending_reward_formula() -> None:
    acc = 10**10
    assert reward_entitlement(500, acc) == 5
    assert pending_reward(500, 0, acc) == 5
    assert pending_reward(500, 2, acc) == 3


def test_pending_reward_clamps_at_zero() -> None:
    assert pending_reward(0, 5, 10**10) == 0


def test_settle_pays_when_vault_covers_pending() -> None:
    s = settle(
        pre_amount=500,
        post_amount=300,
        reward_debt=5,
        acc_reward_per_share=2 * 10**10,
        vault_balance=100,
    )
    assert s.pending == 5
    assert s.paid == 5
    assert not s.shortfall
    assert s.reward_debt == 300 * 2 * 10**10 // REWARD_SCALE


def test_settle_skips_payout_when_vault_is_short() -> None:
    s = settle(
        pre_amount=500,
        post_amount=500,
        reward_debt=5,
        acc_reward_per_share=2 * 10**10,
        vault_balance=4,
    )
    assert s.pending == 5
    assert s.paid == 0
    assert s.shortfall
    assert s.reward_debt == 10
