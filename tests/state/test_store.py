# [TESTER] v1

from __future__ import annotations

from dataclasses import replace

import pytest

from vestamm.errors import AccountExistsError, AccountNotFoundError
from vestamm.state.pools import Pool, compute_pool_id
from vestamm.state.stakes import VestingStake
from vestamm.state.store import AccountStore


def _pool() -> Pool:
    return Pool(
        pool_id=compute_pool_id("LP"),
        authority="admin",
        mint_a="A",
        mint_b="B",
        share_mint="LP",
        reserve_a="ra",
        reserve_b="rb",
        treasury="treasury",
        reward_vault="rv",
        protocol_fee_bps=30,
        treasury_fee_bps=10,
        reward_fee_bps=10,
    )


def _stake(deposit_id: int, pool_id: str = "p") -> VestingStake:
    return VestingStake(
        pool_id=pool_id, owner="alice", amount=10, vesting_end=0, deposit_id=deposit_id, initial_amount=10
    )


def test_pool_lifecycle() -> None:
    store = AccountStore()
    pool = _pool()
    with pytest.raises(AccountNotFoundError):
        store.get_pool(pool.pool_id)
    with pytest.raises(AccountNotFoundError):
        store.put_pool(pool)

    store.create_pool(pool)
    assert store.has_pool(pool.pool_id)
    with pytest.raises(AccountExistsError):
        store.create_pool(pool)

    store.put_pool(pool.with_paused(True))
    assert store.get_pool(pool.pool_id).paused


def test_stake_lifecycle() -> None:
    store = AccountStore()
    stake = _stake(0)
    store.create_stake(stake)
    with pytest.raises(AccountExistsError):
        store.create_stake(stake)
    store.put_stake(replace(stake, claimed=True))
    assert store.get_stake(stake.stake_id).claimed
    with pytest.raises(AccountNotFoundError):
        store.get_stake("0xmissing")


def test_stakes_for_pool_in_deposit_order() -> None:
    store = AccountStore()
    for deposit_id in (2, 0, 1):
        store.create_stake(_stake(deposit_id))
    store.create_stake(_stake(0, pool_id="other"))
    assert [s.deposit_id for s in store.stakes_for_pool("p")] == [0, 1, 2]
