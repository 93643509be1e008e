"""
Ledger effects planned by the functional core.

The core never moves balances itself. Each operation returns an ordered tuple
of these records and the shell hands them to the transfer service, which
applies them all or none.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..state.pools import AccountId, MintId


@dataclass(frozen=True)
class Transfer:
    mint: MintId
    source: AccountId
    destination: AccountId
    amount: int


@dataclass(frozen=True)
class MintTo:
    mint: MintId
    destination: AccountId
    amount: int
    authority: AccountId


@dataclass(frozen=True)
class Burn:
    mint: MintId
    source: AccountId
    amount: int


@dataclass(frozen=True)
class SetMintAuthority:
    mint: MintId
    current_authority: AccountId
    new_authority: AccountId


LedgerEffect = Union[Transfer, MintTo, Burn, SetMintAuthority]


def transfer_if_positive(mint: MintId, source: AccountId, destination: AccountId, amount: int) -> tuple[Transfer, ...]:
    """A one-element tuple with the transfer, or empty when `amount == 0`."""
    if amount <= 0:
        return ()
    return (Transfer(mint=mint, source=source, destination=destination, amount=amount),)
