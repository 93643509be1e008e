"""
Fixed-width integer arithmetic kernel.

Python ints never overflow, so widths are enforced explicitly:
- balances, share amounts and nonces are u64,
- intermediate products and the reward accumulator are u128,
- timestamps are i64.

Every helper raises `NumericOverflowError` instead of wrapping or truncating.
Products of two balance-scale values are always formed at u128 before dividing,
so no precision is lost by dividing first.
"""

from __future__ import annotations

from ...errors import InvalidParameterError, NumericOverflowError


BPS_DENOM = 10_000

U16_MAX = (1 << 16) - 1
U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameterError(f"{name} must be an int: {value!r}")


def _max_for(bits: int) -> int:
    if bits not in (16, 64, 128):
        raise ValueError(f"unsupported width: {bits}")
    return (1 << bits) - 1


def require_uint(name: str, value: int, *, bits: int = 64) -> int:
    """Check that `value` is an unsigned int of the given width and return it."""
    _require_int(name, value)
    if value < 0 or value > _max_for(bits):
        raise NumericOverflowError(f"{name} out of u{bits} range: {value}")
    return value


def to_u64(value: int, *, name: str = "value") -> int:
    """Narrow a (possibly u128) intermediate back to u64."""
    return require_uint(name, value, bits=64)


def checked_add(a: int, b: int, *, bits: int = 64) -> int:
    _require_int("a", a)
    _require_int("b", b)
    out = a + b
    if out < 0 or out > _max_for(bits):
        raise NumericOverflowError(f"u{bits} add overflow: {a} + {b}")
    return out


def checked_sub(a: int, b: int, *, bits: int = 64) -> int:
    _require_int("a", a)
    _require_int("b", b)
    out = a - b
    if out < 0 or out > _max_for(bits):
        raise NumericOverflowError(f"u{bits} sub underflow: {a} - {b}")
    return out


def checked_mul(a: int, b: int, *, bits: int = 128) -> int:
    _require_int("a", a)
    _require_int("b", b)
    out = a * b
    if out < 0 or out > _max_for(bits):
        raise NumericOverflowError(f"u{bits} mul overflow: {a} * {b}")
    return out


def checked_add_i64(a: int, b: int) -> int:
    """Signed 64-bit add, used for `now + lock_seconds`."""
    _require_int("a", a)
    _require_int("b", b)
    out = a + b
    if out < I64_MIN or out > I64_MAX:
        raise NumericOverflowError(f"i64 add overflow: {a} + {b}")
    return out


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    Compute `floor(a * b / denominator)` with a u128 intermediate.
    """
    product = checked_mul(a, b, bits=128)
    if denominator <= 0:
        raise NumericOverflowError(f"division by non-positive denominator: {denominator}")
    return product // denominator


def mul_div_ceil(a: int, b: int, denominator: int) -> int:
    """
    Compute `ceil(a * b / denominator)` with a u128 intermediate.
    """
    product = checked_mul(a, b, bits=128)
    if denominator <= 0:
        raise NumericOverflowError(f"division by non-positive denominator: {denominator}")
    return -(-product // denominator)


def isqrt(x: int) -> int:
    """
    Floor of the square root of a non-negative integer.

    Binary search over [1, x]; the result `r` satisfies r*r <= x < (r+1)*(r+1).
    """
    require_uint("x", x, bits=128)
    if x <= 1:
        return x
    lo, hi = 1, x
    result = 1
    while lo <= hi:
        mid = (lo + hi) // 2
        sq = mid * mid
        if sq == x:
            return mid
        if sq < x:
            result = mid
            lo = mid + 1
        else:
            hi = mid - 1
    return result
