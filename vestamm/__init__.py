"""
VestAMM: pooled-liquidity vesting AMM accounting engine.

Two-asset constant-product pools whose share ("LP") units are minted into
time-locked stakes. Swap fees are split between a treasury and share holders;
the holder part is distributed through a per-share reward accumulator.
"""

from .config import AmmConfig, load_config
from .errors import AmmError, ErrorKind
from .state import AccountStore, Ledger, Pool, VestingStake
from .integration import ManualClock, StepResult, VestingAmm, or_raise

__all__ = [
    "AmmConfig",
    "load_config",
    "AmmError",
    "ErrorKind",
    "AccountStore",
    "Ledger",
    "Pool",
    "VestingStake",
    "ManualClock",
    "StepResult",
    "VestingAmm",
    "or_raise",
]
