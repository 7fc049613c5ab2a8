from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from petarena.cli import app
from petarena.config import RewardBundle, RunResult, encode_run_result


def test_areas_lists_every_area() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["areas"])

    assert result.exit_code == 0, result.output
    lines = [line for line in result.stdout.splitlines() if line.strip()]
    assert len(lines) == 16
    assert lines[0].startswith("scrapyard_1")
    assert "boss=shielded" in lines[0]


def test_areas_json_carries_unlock_requirements() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["areas", "--json"])

    assert result.exit_code == 0, result.output
    rows = json.loads(result.stdout)
    by_id = {row["id"]: row for row in rows}
    assert by_id["forest_1"]["boss"] == "minion_summoner"
    assert by_id["forest_1"]["weakness"] == "speed"
    assert by_id["forest_1"]["unlock"] is None
    assert by_id["ocean_4"]["unlock"] == {"area_id": "ocean_1", "level_required": 5}


def test_simulate_cancelled_run_prints_result_json() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["simulate", "--area", "forest_1", "--seed", "5", "--cancel-after", "2"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["cancelled"] is True
    assert payload["success"] is False
    assert payload["area_id"] == "forest_1"
    assert payload["waves_completed"] == 0
    assert payload["total_waves"] == 6


def test_simulate_is_reproducible_for_a_seed() -> None:
    runner = CliRunner()
    args = ["simulate", "--area", "ocean_1", "--seed", "9", "--strength", "15", "--cancel-after", "20"]

    first = runner.invoke(app, args)
    second = runner.invoke(app, args)

    assert first.exit_code == 0, first.output
    assert json.loads(first.stdout) == json.loads(second.stdout)


def test_simulate_writes_combat_log(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["simulate", "--area", "scrapyard_1", "--cancel-after", "1", "--log-dir", str(tmp_path)],
    )

    assert result.exit_code == 0, result.output
    logs = list((tmp_path / "combat").glob("run-scrapyard_1-*.log"))
    assert len(logs) == 1
    text = logs[0].read_text(encoding="utf-8")
    assert "event=run_start" in text
    assert "event=run_finish" in text
    assert "reason=cancelled" in text


def test_simulate_rejects_unknown_area() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["simulate", "--area", "moon_9"])

    assert result.exit_code == 2
    assert "unknown area" in result.output


def test_simulate_reads_config_file(tmp_path: Path) -> None:
    config = tmp_path / "run.json"
    config.write_text('{"area_id": "mountain_1", "character_id": "capuchino", "seed": 2}', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["simulate", "--config", str(config), "--cancel-after", "1"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["area_id"] == "mountain_1"


def test_result_command_summarizes_saved_result(tmp_path: Path) -> None:
    path = tmp_path / "result.json"
    path.write_bytes(
        encode_run_result(
            RunResult(
                success=True,
                waves_completed=6,
                total_waves=6,
                score=250,
                kills=25,
                area_id="scrapyard_1",
                rewards=RewardBundle(xp=550, coins=245, equipment_id=None),
            )
        )
    )
    runner = CliRunner()

    result = runner.invoke(app, ["result", str(path)])

    assert result.exit_code == 0, result.output
    assert "Scrapyard: victory waves=6/6 score=250" in result.stdout
    assert "item=-" in result.stdout


def test_play_command_builds_view_and_runs_it(monkeypatch) -> None:
    captured: dict[str, Any] = {}

    def _fake_run_view(view, **kwargs):  # noqa: ANN001, ANN003
        captured["view"] = view
        captured["kwargs"] = kwargs

    monkeypatch.setattr("petkit.view.run_view", _fake_run_view)
    runner = CliRunner()

    result = runner.invoke(app, ["play", "--area", "ocean_2", "--character", "bombombini", "--fps", "30"])

    assert result.exit_code == 0, result.output
    from petarena.views.arena_view import ArenaView

    assert isinstance(captured["view"], ArenaView)
    assert captured["kwargs"]["fps"] == 30
    assert captured["kwargs"]["title"] == "Pet Arena: ocean_2"


def test_play_command_takes_run_settings_from_config_file(monkeypatch, tmp_path: Path) -> None:
    captured: dict[str, Any] = {}

    def _fake_run_view(view, **kwargs):  # noqa: ANN001, ANN003
        captured["view"] = view
        captured["kwargs"] = kwargs

    monkeypatch.setattr("petkit.view.run_view", _fake_run_view)
    config = tmp_path / "run.json"
    config.write_text('{"area_id": "mountain_1", "character_id": "capuchino", "seed": 42}', encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["play", "--config", str(config)])

    assert result.exit_code == 0, result.output
    assert captured["kwargs"]["title"] == "Pet Arena: mountain_1"
    assert captured["view"]._character_id == "capuchino"
    assert captured["view"]._session.seed == 42

    result = runner.invoke(app, ["play", "--config", str(config), "--seed", "3"])

    assert result.exit_code == 0, result.output
    assert captured["kwargs"]["title"] == "Pet Arena: mountain_1"
    assert captured["view"]._session.seed == 3
