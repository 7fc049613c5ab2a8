from __future__ import annotations

from pathlib import Path

import pytest

from petarena.config import (
    RewardBundle,
    RunConfig,
    RunConfigError,
    RunResult,
    decode_run_config,
    decode_run_result,
    encode_run_config,
    encode_run_result,
    load_run_config,
    resolve_run_config,
)
from petarena.equipment import EquipmentSlot


def test_decode_run_config_defaults() -> None:
    config = decode_run_config(b"{}")

    assert config.area_id == "scrapyard_1"
    assert config.character_id == "tralalero"
    assert config.equipped == []


def test_resolve_run_config_builds_area_attributes_and_loadout(tmp_path: Path) -> None:
    path = tmp_path / "run.json"
    path.write_text(
        '{"area_id": "forest_2", "character_id": "capuchino", "seed": 5,'
        ' "attributes": {"strength": 12, "speed": 4},'
        ' "equipped": ["iron_sword", "chainmail", "lucky_charm"]}',
        encoding="utf-8",
    )

    config = load_run_config(path)
    area, attributes, equipped = resolve_run_config(config)

    assert area.id == "forest_2"
    assert attributes.strength == 12
    assert attributes.speed == 4
    assert equipped.weapon is not None and equipped.weapon.id == "iron_sword"
    assert equipped.armor is not None and equipped.armor.slot is EquipmentSlot.ARMOR
    assert equipped.accessory is not None and equipped.accessory.id == "lucky_charm"


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        (b'{"area_id": "moon_1"}', "unknown area"),
        (b'{"character_id": "nobody"}', "unknown character"),
        (b'{"equipped": ["laser"]}', "unknown equipment"),
        (b'{"equipped": ["wooden_sword", "iron_sword"]}', "slot"),
        (b'{"colour": "red"}', "invalid run config"),
        (b'{"seed": "seven"}', "invalid run config"),
        (b"not json", "invalid run config"),
    ],
)
def test_decode_run_config_rejects_bad_input(payload: bytes, message: str) -> None:
    with pytest.raises(RunConfigError, match=message):
        decode_run_config(payload)


def test_load_run_config_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RunConfigError, match="cannot read"):
        load_run_config(tmp_path / "missing.json")


def test_run_config_encodes_to_json_it_can_decode() -> None:
    config = RunConfig(area_id="ocean_3", character_id="lirili", seed=77, equipped=["excalibur"])

    assert decode_run_config(encode_run_config(config)) == config


def test_run_result_json_shape() -> None:
    result = RunResult(
        success=True,
        waves_completed=6,
        total_waves=6,
        score=420,
        kills=30,
        area_id="scrapyard_1",
        rewards=RewardBundle(xp=720, coins=330, equipment_id="lucky_charm"),
    )

    data = encode_run_result(result)

    assert b'"waves_completed":6' in data
    assert decode_run_result(data) == result
    with pytest.raises(RunConfigError):
        decode_run_result(b'{"success": "yes"}')
