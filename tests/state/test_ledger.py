# [TESTER] v1

from __future__ import annotations

import pytest

from vestamm.core.effects import Burn, MintTo, SetMintAuthority, Transfer
from vestamm.errors import TransferError
from vestamm.state.ledger import Ledger


def _ledger() -> Ledger:
    ledger = Ledger()
    ledger.create_mint("A", "issuer")
    ledger.mint_to("A", "alice", 100, "issuer")
    return ledger


def test_mint_requires_authority() -> None:
    ledger = _ledger()
    with pytest.raises(TransferError):
        ledger.mint_to("A", "alice", 1, "mallory")
    assert ledger.supply_of("A") == 100


def test_duplicate_mint_is_rejected() -> None:
    with pytest.raises(TransferError):
        _ledger().create_mint("A", "issuer")


def test_transfer_moves_balance() -> None:
    ledger = _ledger()
    ledger.transfer("A", "alice", "bob", 40)
    assert ledger.balance_of("alice", "A") == 60
    assert ledger.balance_of("bob", "A") == 40
    assert ledger.supply_of("A") == 100


def test_transfer_rejects_overdraft_and_unknown_mint() -> None:
    ledger = _ledger()
    with pytest.raises(TransferError):
        ledger.transfer("A", "alice", "bob", 101)
    with pytest.raises(TransferError):
        ledger.transfer("Z", "alice", "bob", 1)


def test_burn_reduces_supply_and_drops_zero_balances() -> None:
    ledger = _ledger()
    ledger.burn("A", "alice", 100)
    assert ledger.supply_of("A") == 0
    assert ledger.balances_for_mint("A") == {}


def test_set_mint_authority() -> None:
    ledger = _ledger()
    ledger.set_mint_authority("A", "issuer", "pool")
    assert ledger.mint_authority("A") == "pool"
    with pytest.raises(TransferError):
        ledger.set_mint_authority("A", "issuer", "other")


def test_execute_applies_batch_in_order() -> None:
    ledger = _ledger()
    ledger.execute(
        [
            Transfer(mint="A", source="alice", destination="bob", amount=30),
            Burn(mint="A", source="bob", amount=10),
            MintTo(mint="A", destination="carol", amount=5, authority="issuer"),
            SetMintAuthority(mint="A", current_authority="issuer", new_authority="pool"),
        ]
    )
    assert ledger.balances_for_mint("A") == {"alice": 70, "bob": 20, "carol": 5}
    assert ledger.supply_of("A") == 95
    assert ledger.mint_authority("A") == "pool"


def test_execute_rolls_back_on_failure() -> None:
    ledger = _ledger()
    with pytest.raises(TransferError):
        ledger.execute(
            [
                Transfer(mint="A", source="alice", destination="bob", amount=60),
                MintTo(mint="A", destination="bob", amount=1, authority="issuer"),
                Transfer(mint="A", source="alice", destination="carol", amount=60),
            ]
        )
    assert ledger.balances_for_mint("A") == {"alice": 100}
    assert ledger.supply_of("A") == 100
