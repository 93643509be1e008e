"""
Share (LP) math kernel.

Pure functions with explicit rounding rules:
- mint: first deposit is floor(sqrt(amount_a * amount_b)); later deposits get the
  *minimum* of the two ratio-implied share counts, so an imbalanced deposit can
  never dilute existing holders.
- burn: proportional floor division against current reserves.

Reserves passed to `mint_amount` are the balances *before* the deposit lands.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import InsufficientLiquidityError
from .fixed_point import checked_mul, isqrt, mul_div_floor, require_uint, to_u64


@dataclass(frozen=True)
class WithdrawAmounts:
    amount_a: int
    amount_b: int


def mint_amount(
    *,
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    current_supply: int,
) -> int:
    """
    Share units to mint for depositing (amount_a, amount_b).

    Raises InsufficientLiquidityError when the result would be zero.
    """
    for name, v in (
        ("amount_a", amount_a),
        ("amount_b", amount_b),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("current_supply", current_supply),
    ):
        require_uint(name, v)

    if current_supply == 0:
        minted = isqrt(checked_mul(amount_a, amount_b))
    else:
        # max(reserve, 1) only avoids a zero divisor on a transiently empty reserve.
        from_a = mul_div_floor(amount_a, current_supply, max(reserve_a, 1))
        from_b = mul_div_floor(amount_b, current_supply, max(reserve_b, 1))
        minted = min(from_a, from_b)

    minted = to_u64(minted, name="shares_minted")
    if minted == 0:
        raise InsufficientLiquidityError("deposit would mint zero shares")
    return minted


def withdraw_amounts(
    *,
    share_amount: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> WithdrawAmounts:
    """
    Reserve amounts paid out for burning `share_amount` shares (floor rounding).
    """
    for name, v in (
        ("share_amount", share_amount),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_supply", total_supply),
    ):
        require_uint(name, v)

    if total_supply == 0:
        raise InsufficientLiquidityError("share supply is zero")
    if share_amount == 0:
        raise InsufficientLiquidityError("share_amount must be positive")
    if share_amount > total_supply:
        raise InsufficientLiquidityError(
            f"cannot burn more than total supply: {share_amount} > {total_supply}"
        )

    amount_a = mul_div_floor(reserve_a, share_amount, total_supply)
    amount_b = mul_div_floor(reserve_b, share_amount, total_supply)
    return WithdrawAmounts(
        amount_a=to_u64(amount_a, name="amount_a"),
        amount_b=to_u64(amount_b, name="amount_b"),
    )
