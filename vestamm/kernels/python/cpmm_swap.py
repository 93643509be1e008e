"""
Constant-product swap kernel.

Semantics:
- The protocol fee is taken from the *gross* input with floor rounding on the
  after-fee amount: `after_fee = floor(amount_in * (10_000 - fee_bps) / 10_000)`.
- `k = reserve_in * reserve_out` is held on the after-fee amount and the new
  out-reserve is rounded *up*: `new_reserve_out = ceil(k / (reserve_in + after_fee))`.
  Rounding toward the pool guarantees `reserve_in' * reserve_out' >= k`.
- The fee is split into treasury / reward / reserve parts in proportion to
  their bps over the protocol fee bps. Only the treasury part leaves the
  reserves; the reward part is accounted through the reward accumulator.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import (
    InsufficientLiquidityError,
    InvalidParameterError,
    InvariantViolationError,
    SlippageExceededError,
)
from .fixed_point import (
    BPS_DENOM,
    checked_add,
    checked_mul,
    checked_sub,
    mul_div_ceil,
    mul_div_floor,
    require_uint,
    to_u64,
)


@dataclass(frozen=True)
class SwapQuote:
    amount_in: int
    amount_in_after_fee: int
    total_fee: int
    amount_out: int
    k_before: int
    new_reserve_in: int
    new_reserve_out: int


@dataclass(frozen=True)
class FeeSplit:
    treasury_fee: int
    reward_fee: int
    reserve_fee: int


@dataclass(frozen=True)
class SwapExactInResult:
    quote: SwapQuote
    fees: FeeSplit
    reserve_in_after: int
    reserve_out_after: int
    k_after: int

    @property
    def amount_out(self) -> int:
        return self.quote.amount_out


def _require_bps(name: str, value: int) -> None:
    require_uint(name, value, bits=16)
    if value > BPS_DENOM:
        raise InvalidParameterError(f"{name} must be in [0, {BPS_DENOM}]: {value}")


def quote(*, amount_in: int, reserve_in: int, reserve_out: int, protocol_fee_bps: int) -> SwapQuote:
    """
    Exact-in quote.

    Raises InsufficientLiquidityError if either reserve is empty or the swap
    would output nothing.
    """
    for name, v in (
        ("amount_in", amount_in),
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
    ):
        require_uint(name, v)
    _require_bps("protocol_fee_bps", protocol_fee_bps)

    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidityError("cannot swap against an empty reserve")
    if amount_in == 0:
        raise InsufficientLiquidityError("amount_in must be positive")

    after_fee = mul_div_floor(amount_in, BPS_DENOM - protocol_fee_bps, BPS_DENOM)
    total_fee = checked_sub(amount_in, after_fee)

    k = checked_mul(reserve_in, reserve_out)
    new_reserve_in = checked_add(reserve_in, after_fee, bits=128)
    new_reserve_out = mul_div_ceil(reserve_in, reserve_out, new_reserve_in)
    amount_out = checked_sub(reserve_out, new_reserve_out)
    if amount_out == 0:
        raise InsufficientLiquidityError("amount_out is zero (trade too small)")

    return SwapQuote(
        amount_in=amount_in,
        amount_in_after_fee=after_fee,
        total_fee=total_fee,
        amount_out=to_u64(amount_out, name="amount_out"),
        k_before=k,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
    )


def split_fee(
    *,
    total_fee: int,
    protocol_fee_bps: int,
    treasury_fee_bps: int,
    reward_fee_bps: int,
) -> FeeSplit:
    """
    Split `total_fee` into (treasury, reward, reserve) parts.

    The ratio divisor is `max(protocol_fee_bps, 1)` so a zero protocol fee never
    divides by zero.
    """
    require_uint("total_fee", total_fee)
    _require_bps("protocol_fee_bps", protocol_fee_bps)
    _require_bps("treasury_fee_bps", treasury_fee_bps)
    _require_bps("reward_fee_bps", reward_fee_bps)

    divisor = max(protocol_fee_bps, 1)
    treasury_fee = mul_div_floor(total_fee, treasury_fee_bps, divisor)
    reward_fee = mul_div_floor(total_fee, reward_fee_bps, divisor)
    remainder = checked_sub(checked_sub(total_fee, treasury_fee), reward_fee)
    return FeeSplit(treasury_fee=treasury_fee, reward_fee=reward_fee, reserve_fee=remainder)


def swap_exact_in(
    *,
    amount_in: int,
    minimum_amount_out: int,
    reserve_in: int,
    reserve_out: int,
    protocol_fee_bps: int,
    treasury_fee_bps: int,
    reward_fee_bps: int,
) -> SwapExactInResult:
    """
    Quote + fee split + post-swap reserves.

    Post reserves reflect what the ledger will hold after the swap effects:
    the full `amount_in` lands in the in-reserve and the treasury fee leaves it.
    """
    require_uint("minimum_amount_out", minimum_amount_out)
    q = quote(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        protocol_fee_bps=protocol_fee_bps,
    )
    if q.amount_out < minimum_amount_out:
        raise SlippageExceededError(
            f"amount_out ({q.amount_out}) < minimum_amount_out ({minimum_amount_out})"
        )

    fees = split_fee(
        total_fee=q.total_fee,
        protocol_fee_bps=protocol_fee_bps,
        treasury_fee_bps=treasury_fee_bps,
        reward_fee_bps=reward_fee_bps,
    )

    reserve_in_after = checked_sub(checked_add(reserve_in, amount_in), fees.treasury_fee)
    reserve_out_after = checked_sub(reserve_out, q.amount_out)
    k_after = checked_mul(reserve_in_after, reserve_out_after)
    if k_after < q.k_before:
        raise InvariantViolationError([f"k_decreased:{q.k_before}->{k_after}"])

    return SwapExactInResult(
        quote=q,
        fees=fees,
        reserve_in_after=reserve_in_after,
        reserve_out_after=reserve_out_after,
        k_after=k_after,
    )
