"""Error taxonomy for the vesting AMM.

Every rejection carries an ``ErrorKind``. Kernels and the functional core raise
the matching ``AmmError`` subclass; the engine in ``integration/engine.py``
catches them and returns a ``StepResult`` instead, so callers see a value, not
an uncontrolled fault. ``or_raise()`` turns a rejected result back into the
exception.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ErrorKind(Enum):
    INVALID_FEE_SPLIT = "InvalidFeeSplit"
    INVALID_VESTING_PERIOD = "InvalidVestingPeriod"
    INVALID_PENALTY = "InvalidPenalty"
    NUMERIC_OVERFLOW = "NumericOverflow"
    INSUFFICIENT_LIQUIDITY = "InsufficientLiquidity"
    SLIPPAGE_EXCEEDED = "SlippageExceeded"
    SLOT_TOO_LOW = "SlotTooLow"
    VESTING_NOT_FINISHED = "VestingNotFinished"
    ALREADY_CLAIMED = "AlreadyClaimed"
    INSUFFICIENT_VESTED_AMOUNT = "InsufficientVestedAmount"
    PAUSED = "Paused"
    UNAUTHORIZED = "Unauthorized"
    INVALID_PARAMETER = "InvalidParameter"
    # Surfaced by the collaborators rather than the accounting core.
    TRANSFER_FAILED = "TransferFailed"
    ACCOUNT_NOT_FOUND = "AccountNotFound"
    ACCOUNT_EXISTS = "AccountExists"
    INVARIANT_VIOLATION = "InvariantViolation"


class AmmError(Exception):
    """Base class for all rejections. ``kind`` identifies the failure."""

    kind: ErrorKind

    def __init__(self, message: str = "") -> None:
        self.message = message or self.kind.value
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class InvalidFeeSplitError(AmmError):
    kind = ErrorKind.INVALID_FEE_SPLIT


class InvalidVestingPeriodError(AmmError):
    kind = ErrorKind.INVALID_VESTING_PERIOD


class InvalidPenaltyError(AmmError):
    kind = ErrorKind.INVALID_PENALTY


class NumericOverflowError(AmmError):
    """Arithmetic left its declared width. Never wrapped silently."""

    kind = ErrorKind.NUMERIC_OVERFLOW


class InsufficientLiquidityError(AmmError):
    """The operation would mint/withdraw/swap zero or divide by a zero supply."""

    kind = ErrorKind.INSUFFICIENT_LIQUIDITY


class SlippageExceededError(AmmError):
    kind = ErrorKind.SLIPPAGE_EXCEEDED


class SlotTooLowError(AmmError):
    kind = ErrorKind.SLOT_TOO_LOW


class VestingNotFinishedError(AmmError):
    kind = ErrorKind.VESTING_NOT_FINISHED


class AlreadyClaimedError(AmmError):
    kind = ErrorKind.ALREADY_CLAIMED


class InsufficientVestedAmountError(AmmError):
    kind = ErrorKind.INSUFFICIENT_VESTED_AMOUNT


class PausedError(AmmError):
    kind = ErrorKind.PAUSED


class UnauthorizedError(AmmError):
    kind = ErrorKind.UNAUTHORIZED


class InvalidParameterError(AmmError):
    """A caller-supplied value has the wrong type or shape (not a range error)."""

    kind = ErrorKind.INVALID_PARAMETER


class TransferError(AmmError):
    """Raised by the ledger when a transfer/mint/burn cannot be applied."""

    kind = ErrorKind.TRANSFER_FAILED


class AccountNotFoundError(AmmError):
    kind = ErrorKind.ACCOUNT_NOT_FOUND


class AccountExistsError(AmmError):
    kind = ErrorKind.ACCOUNT_EXISTS


class InvariantViolationError(AmmError):
    """Raised when a planned post-state violates one or more invariants."""

    kind = ErrorKind.INVARIANT_VIOLATION

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")

