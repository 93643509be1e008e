"""
Notification records emitted by every successful operation.

Events are structured and append-only; nothing in the engine reads them back.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Iterator, List, Type, TypeVar, Union

from ..state.canonical import canonical_json_bytes


@dataclass(frozen=True)
class PoolInitialized:
    pool: str
    authority: str
    treasury: str
    protocol_fee_bps: int
    treasury_fee_bps: int
    reward_fee_bps: int


@dataclass(frozen=True)
class Deposited:
    pool: str
    user: str
    amount_a: int
    amount_b: int
    amount: int
    vesting_end: int
    deposit_id: int


@dataclass(frozen=True)
class Claimed:
    pool: str
    user: str
    amount: int
    reward_paid: int
    reward_pending: int


@dataclass(frozen=True)
class EarlyUnvested:
    pool: str
    user: str
    amount_unvested: int
    penalty: int
    remaining: int
    reward_paid: int = 0


@dataclass(frozen=True)
class Withdrawn:
    pool: str
    user: str
    lp_amount: int
    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class Swapped:
    pool: str
    user: str
    amount_in: int
    amount_out: int
    is_a_to_b: bool
    treasury_fee: int
    reward_fee: int


@dataclass(frozen=True)
class Paused:
    pool: str


@dataclass(frozen=True)
class Unpaused:
    pool: str


@dataclass(frozen=True)
class EmergencyWithdrawn:
    pool: str
    amount_a: int
    amount_b: int


Event = Union[
    PoolInitialized,
    Deposited,
    Claimed,
    EarlyUnvested,
    Withdrawn,
    Swapped,
    Paused,
    Unpaused,
    EmergencyWithdrawn,
]

E = TypeVar("E")


def event_to_dict(event: Event) -> dict:
    """Plain dict with the event type under "event"."""
    out = {"event": type(event).__name__}
    out.update(asdict(event))
    return out


class EventLog:
    """
    Append-only sequence of emitted events.

    Only committed operations are recorded; rejections are logged by the
    engine and leave the log untouched.
    """

    def __init__(self) -> None:
        self._events: List[Event] = []

    def append(self, event: Event) -> None:
        if not hasattr(event, "__dataclass_fields__") or not fields(event):
            raise TypeError(f"not an event record: {event!r}")
        self._events.append(event)

    def of_type(self, kind: Type[E]) -> List[E]:
        return [e for e in self._events if isinstance(e, kind)]

    def to_jsonl(self) -> str:
        return "".join(canonical_json_bytes(event_to_dict(e)).decode("utf-8") + "\n" for e in self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return f"EventLog({len(self._events)} events)"
