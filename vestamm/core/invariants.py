"""Invariant checkers for a pool, its stakes and the share ledger.

Each `inv_*` function returns True when the invariant holds; `check_all()`
returns the ids of violated invariants (empty = all pass). These are audit
checks over committed state, not guards: operations validate their own
preconditions before planning effects.
"""

from __future__ import annotations

from typing import Sequence

from ..errors import InvalidFeeSplitError
from ..state.ledger import Ledger
from ..state.pools import Pool, validate_fee_split
from ..state.stakes import VestingStake


def inv_fee_split(pool: Pool) -> bool:
    try:
        validate_fee_split(pool.protocol_fee_bps, pool.treasury_fee_bps, pool.reward_fee_bps)
    except InvalidFeeSplitError:
        return False
    return True


def inv_closed_when_empty(stakes: Sequence[VestingStake]) -> bool:
    return all(s.claimed or s.amount > 0 for s in stakes)


def inv_nonce_gap_free(pool: Pool, stakes: Sequence[VestingStake]) -> bool:
    ids = sorted(s.deposit_id for s in stakes)
    return ids == list(range(pool.vesting_nonce))


def inv_escrow_matches_stakes(pool: Pool, stakes: Sequence[VestingStake], ledger: Ledger) -> bool:
    for s in stakes:
        held = ledger.balance_of(s.vault_account, pool.share_mint)
        expected = s.amount if s.is_open else 0
        if held != expected:
            return False
    return True


def inv_share_supply_conserved(pool: Pool, ledger: Ledger) -> bool:
    return sum(ledger.balances_for_mint(pool.share_mint).values()) == ledger.supply_of(pool.share_mint)


def check_all(pool: Pool, stakes: Sequence[VestingStake], ledger: Ledger) -> list[str]:
    """Return the list of violated invariant ids."""
    violations: list[str] = []
    if not inv_fee_split(pool):
        violations.append("fee_split")
    if not inv_closed_when_empty(stakes):
        violations.append("closed_when_empty")
    if not inv_nonce_gap_free(pool, stakes):
        violations.append("nonce_gap_free")
    if not inv_escrow_matches_stakes(pool, stakes, ledger):
        violations.append("escrow_matches_stakes")
    if not inv_share_supply_conserved(pool, ledger):
        violations.append("share_supply_conserved")
    return violations
