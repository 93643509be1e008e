"""
In-memory token ledger.

Implements the transfer-service contract used by the engine:
BalanceTable[(account, mint)] -> amount, plus per-mint supply and mint authority.

Each primitive (transfer / mint_to / burn / set_mint_authority) is atomic on
its own; `execute()` applies a whole batch all-or-nothing.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from ..core.effects import Burn, LedgerEffect, MintTo, SetMintAuthority, Transfer
from ..errors import TransferError
from ..kernels.python.fixed_point import U64_MAX
from .pools import AccountId, MintId


class Ledger:
    """
    Balance table mapping (account, mint) -> amount.

    Notes:
    - Balances and supplies are u64 and never negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: Dict[Tuple[AccountId, MintId], int] = {}
        self._supply: Dict[MintId, int] = {}
        self._authority: Dict[MintId, Optional[AccountId]] = {}

    # -- reads ---------------------------------------------------------------

    def balance_of(self, account: AccountId, mint: MintId) -> int:
        """Balance of (account, mint). Returns 0 if not found."""
        return self._balances.get((account, mint), 0)

    def supply_of(self, mint: MintId) -> int:
        return self._supply.get(mint, 0)

    def mint_authority(self, mint: MintId) -> Optional[AccountId]:
        return self._authority.get(mint)

    def balances_for_mint(self, mint: MintId) -> Dict[AccountId, int]:
        return {acct: amt for (acct, m), amt in self._balances.items() if m == mint}

    # -- primitives ----------------------------------------------------------

    def create_mint(self, mint: MintId, authority: AccountId) -> None:
        if mint in self._supply:
            raise TransferError(f"mint already exists: {mint}")
        self._supply[mint] = 0
        self._authority[mint] = authority

    def _require_mint(self, mint: MintId) -> None:
        if mint not in self._supply:
            raise TransferError(f"unknown mint: {mint}")

    def _set(self, account: AccountId, mint: MintId, amount: int) -> None:
        if amount < 0:
            raise TransferError(f"balance cannot be negative: {amount}")
        if amount > U64_MAX:
            raise TransferError(f"balance exceeds u64: {amount}")
        if amount == 0:
            self._balances.pop((account, mint), None)
        else:
            self._balances[(account, mint)] = amount

    @staticmethod
    def _require_amount(amount: int) -> None:
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            raise TransferError(f"amount must be a non-negative int: {amount!r}")

    def transfer(self, mint: MintId, source: AccountId, destination: AccountId, amount: int) -> None:
        self._require_mint(mint)
        self._require_amount(amount)
        have = self.balance_of(source, mint)
        if have < amount:
            raise TransferError(f"insufficient balance in {source}: {have} < {amount}")
        if source == destination:
            return
        dest_after = self.balance_of(destination, mint) + amount
        if dest_after > U64_MAX:
            raise TransferError(f"balance of {destination} would exceed u64")
        self._set(source, mint, have - amount)
        self._set(destination, mint, dest_after)

    def mint_to(self, mint: MintId, destination: AccountId, amount: int, authority: AccountId) -> None:
        self._require_mint(mint)
        self._require_amount(amount)
        if self._authority.get(mint) != authority:
            raise TransferError(f"{authority} is not the mint authority of {mint}")
        supply_after = self.supply_of(mint) + amount
        if supply_after > U64_MAX:
            raise TransferError(f"supply of {mint} would exceed u64")
        self._set(destination, mint, self.balance_of(destination, mint) + amount)
        self._supply[mint] = supply_after

    def burn(self, mint: MintId, source: AccountId, amount: int) -> None:
        self._require_mint(mint)
        self._require_amount(amount)
        have = self.balance_of(source, mint)
        if have < amount:
            raise TransferError(f"insufficient balance to burn in {source}: {have} < {amount}")
        self._set(source, mint, have - amount)
        self._supply[mint] = self.supply_of(mint) - amount

    def set_mint_authority(self, mint: MintId, current_authority: AccountId, new_authority: AccountId) -> None:
        self._require_mint(mint)
        if self._authority.get(mint) != current_authority:
            raise TransferError(f"{current_authority} is not the mint authority of {mint}")
        self._authority[mint] = new_authority

    # -- batches -------------------------------------------------------------

    def _apply(self, effect: LedgerEffect) -> None:
        if isinstance(effect, Transfer):
            self.transfer(effect.mint, effect.source, effect.destination, effect.amount)
        elif isinstance(effect, MintTo):
            self.mint_to(effect.mint, effect.destination, effect.amount, effect.authority)
        elif isinstance(effect, Burn):
            self.burn(effect.mint, effect.source, effect.amount)
        elif isinstance(effect, SetMintAuthority):
            self.set_mint_authority(effect.mint, effect.current_authority, effect.new_authority)
        else:
            raise TransferError(f"unsupported ledger effect: {effect!r}")

    def execute(self, effects: Iterable[LedgerEffect]) -> None:
        """
        Apply `effects` in order, all or none.

        On the first failure every earlier effect of the batch is rolled back
        and the TransferError is re-raised.
        """
        saved = (dict(self._balances), dict(self._supply), dict(self._authority))
        try:
            for effect in effects:
                self._apply(effect)
        except TransferError:
            self._balances, self._supply, self._authority = saved
            raise

    def __repr__(self) -> str:
        return f"Ledger({len(self._balances)} balances, {len(self._supply)} mints)"
