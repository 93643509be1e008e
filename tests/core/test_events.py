# [TESTER] v1

from __future__ import annotations

import json

import pytest

from vestamm.core.events import Claimed, EventLog, Paused, Swapped, event_to_dict


def test_event_to_dict_tags_the_type() -> None:
    d = event_to_dict(Paused(pool="p"))
    assert d == {"event": "Paused", "pool": "p"}


def test_event_log_is_append_only_and_filterable() -> None:
    log = EventLog()
    log.append(Paused(pool="p"))
    log.append(Claimed(pool="p", user="alice", amount=10, reward_paid=0, reward_pending=3))
    log.append(Paused(pool="q"))

    assert len(log) == 3
    assert [e.pool for e in log.of_type(Paused)] == ["p", "q"]
    assert log.of_type(Swapped) == []

    # Iteration hands out a copy.
    snapshot = list(log)
    log.append(Paused(pool="r"))
    assert len(snapshot) == 3


def test_to_jsonl_is_canonical() -> None:
    log = EventLog()
    log.append(Swapped(pool="p", user="bob", amount_in=5, amount_out=4, is_a_to_b=True, treasury_fee=0, reward_fee=0))
    lines = log.to_jsonl().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith('{"amount_in":5,"amount_out":4,"event":"Swapped"')
    assert json.loads(lines[0])["is_a_to_b"] is True


def test_append_rejects_non_events() -> None:
    with pytest.raises(TypeError):
        EventLog().append({"event": "Paused"})
