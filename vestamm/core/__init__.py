"""
Core vesting AMM algorithms (functional core).

Everything here is pure: operations return a `Transition` and never touch
balances. `invariants` is imported on demand since it reads the ledger.
"""

from .effects import Burn, LedgerEffect, MintTo, SetMintAuthority, Transfer
from .events import Event, EventLog, event_to_dict
from .operations import PoolSnapshot, Transition
from .rewards import REWARD_SCALE, accrue, pending_reward, settle
from .vesting import VestingStatus, stake_status

__all__ = [
    "Burn",
    "LedgerEffect",
    "MintTo",
    "SetMintAuthority",
    "Transfer",
    "Event",
    "EventLog",
    "event_to_dict",
    "PoolSnapshot",
    "Transition",
    "REWARD_SCALE",
    "accrue",
    "pending_reward",
    "settle",
    "VestingStatus",
    "stake_status",
]
