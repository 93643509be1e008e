"""
State records and in-memory collaborators for VestAMM
"""

from .pools import Pool, compute_pool_id
from .stakes import VestingStake, compute_stake_id
from .store import AccountStore
from .ledger import Ledger

__all__ = [
    "Pool",
    "compute_pool_id",
    "VestingStake",
    "compute_stake_id",
    "AccountStore",
    "Ledger",
]
