from __future__ import annotations

import json
from pathlib import Path

import typer

from .areas import AREAS, area_by_id
from .autopilot import Autopilot
from .config import (
    AttributesConfig,
    RunConfig,
    RunConfigError,
    decode_run_result,
    encode_run_result,
    load_run_config,
    resolve_run_config,
)
from .constants import TICK_RATE
from .debug_log import close_combat_log, init_combat_log
from .sim.session import CombatSession

app = typer.Typer(add_completion=False)


def _fail(message: str, *, code: int = 2) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code=code)


def _build_config(
    *,
    config_path: Path | None,
    area: str | None,
    character: str | None,
    seed: int | None,
    speed: int | None,
    wisdom: int | None,
    strength: int | None,
    clarity: int | None,
    equip: list[str] | None,
) -> RunConfig:
    config = load_run_config(config_path) if config_path is not None else RunConfig()
    attrs = config.attributes
    # Command-line values override the file.
    return RunConfig(
        area_id=area if area is not None else config.area_id,
        character_id=character if character is not None else config.character_id,
        seed=seed if seed is not None else config.seed,
        attributes=AttributesConfig(
            speed=speed if speed is not None else attrs.speed,
            wisdom=wisdom if wisdom is not None else attrs.wisdom,
            strength=strength if strength is not None else attrs.strength,
            clarity=clarity if clarity is not None else attrs.clarity,
        ),
        equipped=list(equip) if equip else list(config.equipped),
    )


def _session_for(config: RunConfig) -> CombatSession:
    area, attributes, equipped = resolve_run_config(config)
    return CombatSession.build(
        area=area,
        attributes=attributes,
        equipped=equipped,
        character_id=config.character_id,
        seed=config.seed,
    )


@app.command("areas")
def cmd_areas(
    as_json: bool = typer.Option(False, "--json", help="print areas as JSON"),
) -> None:
    """List arena areas, their weakness and boss archetype."""
    if as_json:
        rows = [
            {
                "id": area.id,
                "name": area.name,
                "type": area.type.value,
                "weakness": area.weakness.value,
                "difficulty": area.difficulty,
                "required_level": area.required_level,
                "boss": area.boss.name.lower(),
                "unlock": None
                if area.unlock is None
                else {"area_id": area.unlock.area_id, "level_required": area.unlock.level_required},
            }
            for area in AREAS
        ]
        typer.echo(json.dumps(rows, indent=2))
        return
    for area in AREAS:
        typer.echo(
            f"{area.id:<12} {area.name:<18} {area.type.value:<9} weak={area.weakness.value:<8} "
            f"difficulty={area.difficulty} boss={area.boss.name.lower()}"
        )


@app.command("simulate")
def cmd_simulate(
    area: str | None = typer.Option(None, help="area id (see `areas`)"),
    character: str | None = typer.Option(None, help="character id"),
    seed: int | None = typer.Option(None, help="spawn/reward seed"),
    config: Path | None = typer.Option(None, "--config", help="run config JSON"),
    speed: int | None = typer.Option(None, help="speed attribute"),
    wisdom: int | None = typer.Option(None, help="wisdom attribute"),
    strength: int | None = typer.Option(None, help="strength attribute"),
    clarity: int | None = typer.Option(None, help="clarity attribute"),
    equip: list[str] | None = typer.Option(None, "--equip", help="equipment id (repeatable)"),
    cancel_after: float | None = typer.Option(None, help="cancel the run after N simulated seconds"),
    log_dir: Path | None = typer.Option(None, help="write a combat trace under this directory"),
) -> None:
    """Run one arena fight headless with the autopilot and print the result JSON."""
    try:
        run_config = _build_config(
            config_path=config,
            area=area,
            character=character,
            seed=seed,
            speed=speed,
            wisdom=wisdom,
            strength=strength,
            clarity=clarity,
            equip=equip,
        )
        session = _session_for(run_config)
    except RunConfigError as exc:
        raise _fail(f"error: {exc}") from exc

    if log_dir is not None:
        path = init_combat_log(
            base_dir=log_dir,
            area_id=run_config.area_id,
            character_id=run_config.character_id,
            seed=run_config.seed,
        )
        typer.echo(f"combat log: {path}", err=True)

    pilot = Autopilot()
    cancel_tick = None if cancel_after is None else max(0, int(float(cancel_after) * TICK_RATE))
    try:
        session.start()
        while session.playing:
            if cancel_tick is not None and session.tick >= cancel_tick:
                session.cancel()
                break
            session.step_tick(pilot.next_input(session.snapshot()))
    finally:
        close_combat_log()

    result = session.result
    if result is None:
        raise _fail("error: run produced no result", code=1)
    typer.echo(encode_run_result(result).decode("utf-8"))


@app.command("result")
def cmd_result(path: Path = typer.Argument(..., help="run result JSON file")) -> None:
    """Summarize a saved run result."""
    try:
        result = decode_run_result(path.read_bytes())
    except OSError as exc:
        raise _fail(f"error: cannot read {path}: {exc}") from exc
    except RunConfigError as exc:
        raise _fail(f"error: {exc}") from exc
    area = area_by_id(result.area_id)
    name = area.name if area is not None else result.area_id
    outcome = "victory" if result.success else "defeat"
    typer.echo(f"{name}: {outcome} waves={result.waves_completed}/{result.total_waves} score={result.score}")
    drop = result.rewards.equipment_id or "-"
    typer.echo(f"rewards: xp={result.rewards.xp} coins={result.rewards.coins} item={drop}")


@app.command("play")
def cmd_play(
    area: str | None = typer.Option(None, help="area id (see `areas`)"),
    character: str | None = typer.Option(None, help="character id"),
    seed: int | None = typer.Option(None, help="spawn/reward seed"),
    config: Path | None = typer.Option(None, "--config", help="run config JSON"),
    assets_dir: Path | None = typer.Option(None, help="optional sprite directory"),
    fps: int = typer.Option(60, help="target fps"),
    log_dir: Path | None = typer.Option(None, help="write a combat trace under this directory"),
) -> None:
    """Open the arena in a Raylib window."""
    from petkit.view import run_view

    from .views.arena_view import ArenaView

    try:
        run_config = _build_config(
            config_path=config,
            area=area,
            character=character,
            seed=seed,
            speed=None,
            wisdom=None,
            strength=None,
            clarity=None,
            equip=None,
        )
        session = _session_for(run_config)
    except RunConfigError as exc:
        raise _fail(f"error: {exc}") from exc

    if log_dir is not None:
        init_combat_log(
            base_dir=log_dir,
            area_id=run_config.area_id,
            character_id=run_config.character_id,
            seed=run_config.seed,
        )
    view = ArenaView(session, character_id=run_config.character_id, assets_dir=assets_dir)
    try:
        run_view(view, title=f"Pet Arena: {session.area_id}", fps=fps)
    finally:
        close_combat_log()


def main(argv: list[str] | None = None) -> None:
    app(prog_name="petarena", args=argv)


if __name__ == "__main__":
    main()
