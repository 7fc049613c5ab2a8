from __future__ import annotations

from pathlib import Path

import msgspec

from .areas import AREA_BY_ID, AreaDef
from .attributes import Attributes
from .equipment import EQUIPMENT_BY_ID, Equipped
from .weapons import CHARACTER_BY_ID

__all__ = [
    "AttributesConfig",
    "RewardBundle",
    "RunConfig",
    "RunConfigError",
    "RunResult",
    "decode_run_config",
    "decode_run_result",
    "encode_run_config",
    "encode_run_result",
    "load_run_config",
    "resolve_run_config",
]


class RunConfigError(ValueError):
    pass


class AttributesConfig(msgspec.Struct, forbid_unknown_fields=True):
    speed: int = 0
    wisdom: int = 0
    strength: int = 0
    clarity: int = 0

    def to_attributes(self) -> Attributes:
        return Attributes(
            speed=int(self.speed),
            wisdom=int(self.wisdom),
            strength=int(self.strength),
            clarity=int(self.clarity),
        )


class RunConfig(msgspec.Struct, forbid_unknown_fields=True):
    area_id: str = "scrapyard_1"
    character_id: str = "tralalero"
    seed: int = 0
    attributes: AttributesConfig = msgspec.field(default_factory=AttributesConfig)
    equipped: list[str] = msgspec.field(default_factory=list)


class RewardBundle(msgspec.Struct, forbid_unknown_fields=True):
    xp: int = 0
    coins: int = 0
    equipment_id: str | None = None


class RunResult(msgspec.Struct, forbid_unknown_fields=True):
    success: bool = False
    waves_completed: int = 0
    total_waves: int = 0
    score: int = 0
    kills: int = 0
    area_id: str = ""
    cancelled: bool = False
    rewards: RewardBundle = msgspec.field(default_factory=RewardBundle)


_RUN_CONFIG_DECODER = msgspec.json.Decoder(RunConfig)
_RUN_RESULT_DECODER = msgspec.json.Decoder(RunResult)


def _validate(config: RunConfig) -> RunConfig:
    if config.area_id not in AREA_BY_ID:
        raise RunConfigError(f"unknown area id: {config.area_id!r}")
    if config.character_id not in CHARACTER_BY_ID:
        raise RunConfigError(f"unknown character id: {config.character_id!r}")
    seen_slots: set[str] = set()
    for item_id in config.equipped:
        item = EQUIPMENT_BY_ID.get(item_id)
        if item is None:
            raise RunConfigError(f"unknown equipment id: {item_id!r}")
        if item.slot.value in seen_slots:
            raise RunConfigError(f"more than one item equipped in slot {item.slot.value!r}")
        seen_slots.add(item.slot.value)
    return config


def decode_run_config(data: bytes) -> RunConfig:
    try:
        config = _RUN_CONFIG_DECODER.decode(data)
    except msgspec.DecodeError as exc:
        raise RunConfigError(f"invalid run config: {exc}") from exc
    return _validate(config)


def load_run_config(path: Path) -> RunConfig:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise RunConfigError(f"cannot read run config {path}: {exc}") from exc
    return decode_run_config(data)


def encode_run_config(config: RunConfig) -> bytes:
    return msgspec.json.encode(config)


def resolve_run_config(config: RunConfig) -> tuple[AreaDef, Attributes, Equipped]:
    _validate(config)
    equipped = Equipped()
    for item_id in config.equipped:
        equipped = equipped.with_item(EQUIPMENT_BY_ID[item_id])
    return AREA_BY_ID[config.area_id], config.attributes.to_attributes(), equipped


def encode_run_result(result: RunResult) -> bytes:
    return msgspec.json.encode(result)


def decode_run_result(data: bytes) -> RunResult:
    try:
        return _RUN_RESULT_DECODER.decode(data)
    except msgspec.DecodeError as exc:
        raise RunConfigError(f"invalid run result: {exc}") from exc
