"""
Reward accumulator kernel.

One shared value per pool, `acc_reward_per_share`, grows with every swap that
routes a reward fee. Each stake keeps a `reward_debt` snapshot; what it is owed
is the entitlement at the current accumulator minus that snapshot. Nothing
iterates over stakes.

All values are integers; the accumulator is scaled by `scale` (default 1e12).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import DEFAULT_REWARD_SCALE
from ..kernels.python.fixed_point import checked_add, mul_div_floor, require_uint, to_u64


REWARD_SCALE = DEFAULT_REWARD_SCALE


@dataclass(frozen=True)
class RewardSettlement:
    """
    Outcome of settling one stake.

    `pending` is what the stake was owed; `paid` is what the vault can actually
    cover (either `pending` or 0); `reward_debt` is the re-baselined snapshot.
    """

    pending: int
    paid: int
    reward_debt: int

    @property
    def shortfall(self) -> bool:
        return self.paid < self.pending


def accrue(acc_reward_per_share: int, *, reward_fee: int, share_supply: int, scale: int = REWARD_SCALE) -> int:
    """
    Return the accumulator after distributing `reward_fee` over `share_supply`.

    No-op when there is no supply or no reward. `share_supply` must be read
    before any mint/burn of the same operation.
    """
    require_uint("acc_reward_per_share", acc_reward_per_share, bits=128)
    require_uint("reward_fee", reward_fee, bits=128)
    require_uint("share_supply", share_supply)
    if share_supply == 0 or reward_fee == 0:
        return acc_reward_per_share
    delta = mul_div_floor(reward_fee, scale, share_supply)
    return checked_add(acc_reward_per_share, delta, bits=128)


def reward_entitlement(amount: int, acc_reward_per_share: int, *, scale: int = REWARD_SCALE) -> int:
    """`amount * acc // scale`: total reward earned by `amount` shares since genesis."""
    require_uint("amount", amount)
    require_uint("acc_reward_per_share", acc_reward_per_share, bits=128)
    return mul_div_floor(amount, acc_reward_per_share, scale)


def pending_reward(amount: int, reward_debt: int, acc_reward_per_share: int, *, scale: int = REWARD_SCALE) -> int:
    """
    Reward owed since the last settlement, clamped at zero.

    A negative raw difference means the debt was never tracked against this
    amount (e.g. after an unsettled early exit) and is not an error.
    """
    require_uint("reward_debt", reward_debt, bits=128)
    owed = reward_entitlement(amount, acc_reward_per_share, scale=scale) - reward_debt
    return owed if owed > 0 else 0


def settle(
    *,
    pre_amount: int,
    post_amount: int,
    reward_debt: int,
    acc_reward_per_share: int,
    vault_balance: int,
    scale: int = REWARD_SCALE,
) -> RewardSettlement:
    """
    Settle a stake whose amount changes from `pre_amount` to `post_amount`.

    Pending reward is measured against the pre-change amount; the debt is
    re-baselined against the post-change amount. Payout is best-effort: if the
    reward vault cannot cover it, nothing is paid.
    """
    require_uint("vault_balance", vault_balance)
    pending = to_u64(
        pending_reward(pre_amount, reward_debt, acc_reward_per_share, scale=scale),
        name="pending_reward",
    )
    paid = pending if vault_balance >= pending else 0
    new_debt = reward_entitlement(post_amount, acc_reward_per_share, scale=scale)
    return RewardSettlement(pending=pending, paid=paid, reward_debt=new_debt)
