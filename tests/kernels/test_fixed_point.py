# [TESTER] v1

from __future__ import annotations

import pytest

from vestamm.errors import InvalidParameterError, NumericOverflowError
from vestamm.kernels.python.fixed_point import (
    I64_MAX,
    U64_MAX,
    U128_MAX,
    checked_add,
    checked_add_i64,
    checked_mul,
    checked_sub,
    isqrt,
    mul_div_ceil,
    mul_div_floor,
    require_uint,
    to_u64,
)


def test_checked_add_rejects_u64_overflow() -> None:
    assert checked_add(U64_MAX - 1, 1) == U64_MAX
    with pytest.raises(NumericOverflowError):
        checked_add(U64_MAX, 1)


def test_checked_add_honors_wider_width() -> None:
    assert checked_add(U64_MAX, 1, bits=128) == U64_MAX + 1


def test_checked_sub_rejects_underflow() -> None:
    assert checked_sub(5, 5) == 0
    with pytest.raises(NumericOverflowError):
        checked_sub(1, 2)


def test_checked_mul_is_u128_by_default() -> None:
    assert checked_mul(U64_MAX, U64_MAX) == U64_MAX * U64_MAX
    with pytest.raises(NumericOverflowError):
        checked_mul(U128_MAX, 2)


def test_checked_add_i64_bounds() -> None:
    assert checked_add_i64(-10, 4) == -6
    with pytest.raises(NumericOverflowError):
        checked_add_i64(I64_MAX, 1)


def test_mul_div_rounding_directions() -> None:
    assert mul_div_floor(7, 3, 2) == 10
    assert mul_div_ceil(7, 3, 2) == 11
    assert mul_div_ceil(6, 3, 2) == 9


def test_mul_div_keeps_precision_of_wide_product() -> None:
    # (2**64 - 1) * (2**64 - 1) does not fit u64 but the quotient does.
    assert mul_div_floor(U64_MAX, U64_MAX, U64_MAX) == U64_MAX


def test_mul_div_rejects_zero_denominator() -> None:
    with pytest.raises(NumericOverflowError):
        mul_div_floor(1, 1, 0)
    with pytest.raises(NumericOverflowError):
        mul_div_ceil(1, 1, 0)


def test_to_u64_narrowing() -> None:
    assert to_u64(U64_MAX) == U64_MAX
    with pytest.raises(NumericOverflowError):
        to_u64(U64_MAX + 1)


def test_require_uint_rejects_bool_and_negative() -> None:
    with pytest.raises(InvalidParameterError):
        require_uint("flag", True)
    with pytest.raises(InvalidParameterError):
        require_uint("amount", 10.5)
    with pytest.raises(NumericOverflowError):
        require_uint("x", -1)


@pytest.mark.parametrize("x,expected", [(0, 0), (1, 1), (2, 1), (15, 3), (16, 4), (17, 4)])
def test_isqrt_small_values(x: int, expected: int) -> None:
    assert isqrt(x) == expected


def test_isqrt_is_exact_for_wide_squares() -> None:
    # Float sqrt loses precision here.
    n = (1 << 60) + 7
    assert isqrt(n * n) == n
    assert isqrt(n * n - 1) == n - 1
