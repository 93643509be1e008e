"""
Imperative shell and collaborator contracts
"""

from .clock import ManualClock
from .engine import StepResult, VestingAmm, or_raise
from .ports import AccountStore, Clock, TransferService

__all__ = [
    "ManualClock",
    "StepResult",
    "VestingAmm",
    "or_raise",
    "AccountStore",
    "Clock",
    "TransferService",
]
