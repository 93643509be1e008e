# [TESTER] v1

from __future__ import annotations

import pytest

from vestamm.config import (
    DEFAULT_MAX_VESTING_SECONDS,
    DEFAULT_MIN_VESTING_SECONDS,
    AmmConfig,
    config_from_mapping,
    load_config,
)


def test_defaults() -> None:
    cfg = AmmConfig()
    assert cfg.min_vesting_seconds == DEFAULT_MIN_VESTING_SECONDS == 2_592_000
    assert cfg.max_vesting_seconds == DEFAULT_MAX_VESTING_SECONDS == 15_552_000
    assert cfg.reward_scale == 10**12
    assert cfg.settle_reward_on_early_exit is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_vesting_seconds": 10, "max_vesting_seconds": 5},
        {"min_vesting_seconds": -1},
        {"reward_scale": 0},
    ],
)
def test_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        AmmConfig(**kwargs)


def test_non_int_values() -> None:
    with pytest.raises(TypeError):
        AmmConfig(reward_scale=1.5)
    with pytest.raises(TypeError):
        AmmConfig(settle_reward_on_early_exit="yes")


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="unknown config keys: fee_bps"):
        config_from_mapping({"fee_bps": 30})


def test_load_config_flat(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("min_vesting_seconds: 60\nmax_vesting_seconds: 120\n", encoding="utf-8")
    cfg = load_config(path)
    assert (cfg.min_vesting_seconds, cfg.max_vesting_seconds) == (60, 120)


def test_load_config_nested_section(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("vestamm:\n  settle_reward_on_early_exit: true\n  reward_scale: 1000000\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg.settle_reward_on_early_exit is True
    assert cfg.reward_scale == 1_000_000


def test_load_config_empty_file(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AmmConfig()


def test_load_config_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path)
