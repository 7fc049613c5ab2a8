from __future__ import annotations

import math
from pathlib import Path

import pyray as rl

from petkit.color import RGBA
from petkit.geom import Vec2

from ..constants import CHARGE_LEVEL_INTERVAL_MS, CHARGE_THRESHOLD_MS, GAME_HEIGHT, GAME_WIDTH, MAX_CHARGE_LEVEL, PLAYER_SIZE
from ..effects import ParticleShape
from ..monsters.state import Boss, Elite, Minion, MinionRequirement
from ..projectiles.types import ProjectileKind
from ..sim.input import MoveKey
from ..sim.session import CombatSession
from ..sim.snapshot import MonsterView, WorldSnapshot
from ..sim.state_types import RunPhase
from ..weapons import character_by_id

__all__ = ["ArenaView"]

HUD_HEIGHT = 60
BG_COLOR = rl.Color(24, 28, 36, 255)
ARENA_COLOR = rl.Color(40, 52, 44, 255)
HUD_COLOR = rl.Color(14, 16, 20, 255)
TEXT_COLOR = rl.Color(230, 230, 230, 255)
HINT_COLOR = rl.Color(150, 150, 150, 255)
HEALTH_BG = rl.Color(60, 20, 20, 255)
HEALTH_FG = rl.Color(90, 220, 90, 255)
SHIELD_COLOR = rl.Color(80, 180, 255, 255)
VULNERABLE_COLOR = rl.Color(255, 220, 60, 255)
DOT_COLOR = rl.Color(33, 150, 243, 255)

MONSTER_COLOR = RGBA.from_hex("#ff5252")
ELITE_COLOR = RGBA.from_hex("#9c27b0")
BOSS_COLOR = RGBA.from_hex("#ff9800")
MINION_COLOR = RGBA.from_hex("#ffab91")
CHARGED_MINION_COLOR = RGBA.from_hex("#ffd54f")

PROJECTILE_COLORS: dict[ProjectileKind, RGBA] = {
    ProjectileKind.DEFAULT: RGBA.from_hex("#ffffff"),
    ProjectileKind.WATERBALL: RGBA.from_hex("#2196f3"),
    ProjectileKind.BANANA: RGBA.from_hex("#ffeb3b"),
    ProjectileKind.ACORN: RGBA.from_hex("#8d6e63"),
    ProjectileKind.BOOMERANG: RGBA.from_hex("#ff5722"),
}

_MOVE_KEYS: tuple[tuple[MoveKey, tuple[int, ...]], ...] = (
    (MoveKey.UP, (rl.KeyboardKey.KEY_W, rl.KeyboardKey.KEY_UP)),
    (MoveKey.DOWN, (rl.KeyboardKey.KEY_S, rl.KeyboardKey.KEY_DOWN)),
    (MoveKey.LEFT, (rl.KeyboardKey.KEY_A, rl.KeyboardKey.KEY_LEFT)),
    (MoveKey.RIGHT, (rl.KeyboardKey.KEY_D, rl.KeyboardKey.KEY_RIGHT)),
)


def _arena(pos: Vec2) -> rl.Vector2:
    return (pos + Vec2(0.0, HUD_HEIGHT)).to_rl()


class ArenaView:
    """Raylib presentation of one `CombatSession`.

    Reads only `WorldSnapshot`s; input is forwarded to the session's tracker.
    Sprites are loaded best-effort from `assets_dir`; anything missing is drawn
    as a colored placeholder.
    """

    def __init__(self, session: CombatSession, *, character_id: str, assets_dir: Path | None = None) -> None:
        self._session = session
        self._character_id = character_id
        self._assets_dir = assets_dir
        self._textures: dict[str, rl.Texture] = {}
        self._closing = False
        character = character_by_id(character_id)
        self._player_color = character.color if character is not None else RGBA.from_hex("#4caf50")
        self._snapshot: WorldSnapshot = session.snapshot()

    def _try_load(self, key: str, filename: str) -> None:
        if self._assets_dir is None:
            return
        path = self._assets_dir / filename
        if not path.is_file():
            return
        texture = rl.load_texture(str(path))
        if int(texture.id) > 0:
            self._textures[key] = texture

    def open(self) -> None:
        rl.set_exit_key(rl.KeyboardKey.KEY_NULL)
        self._try_load("player", f"{self._character_id}.png")
        self._try_load("monster", "enemy-basic.png")
        self._try_load("elite", "enemy-elite.png")
        self._try_load("boss", "enemy-boss.png")

    def close(self) -> None:
        for texture in self._textures.values():
            rl.unload_texture(texture)
        self._textures.clear()

    def should_close(self) -> bool:
        return self._closing

    def _sync_input(self) -> None:
        tracker = self._session.input
        for key, bindings in _MOVE_KEYS:
            if any(rl.is_key_down(binding) for binding in bindings):
                tracker.press(key)
            else:
                tracker.release(key)
        mouse = rl.get_mouse_position()
        tracker.set_aim(Vec2(float(mouse.x), float(mouse.y) - HUD_HEIGHT))
        attack_down = rl.is_key_down(rl.KeyboardKey.KEY_SPACE) or rl.is_mouse_button_down(
            rl.MouseButton.MOUSE_BUTTON_LEFT
        )
        if attack_down:
            tracker.attack_press()
        else:
            tracker.attack_release()

    def update(self, dt: float) -> None:
        session = self._session
        match session.phase:
            case RunPhase.READY:
                if rl.is_key_pressed(rl.KeyboardKey.KEY_ENTER):
                    session.start()
                elif rl.is_key_pressed(rl.KeyboardKey.KEY_ESCAPE):
                    self._closing = True
            case RunPhase.PLAYING:
                if rl.is_key_pressed(rl.KeyboardKey.KEY_ESCAPE):
                    session.cancel()
                else:
                    self._sync_input()
                    session.update(dt)
            case RunPhase.FINISHED:
                if rl.is_key_pressed(rl.KeyboardKey.KEY_ENTER) or rl.is_key_pressed(rl.KeyboardKey.KEY_ESCAPE):
                    self._closing = True
        self._snapshot = session.snapshot()

    def _draw_sprite(self, key: str, pos: Vec2, size: float, color: RGBA) -> None:
        texture = self._textures.get(key)
        if texture is None:
            rl.draw_circle_v(_arena(pos), size * 0.5, color.to_rl())
            return
        src = rl.Rectangle(0.0, 0.0, float(texture.width), float(texture.height))
        dst = rl.Rectangle(pos.x - size * 0.5, pos.y - size * 0.5 + HUD_HEIGHT, size, size)
        rl.draw_texture_pro(texture, src, dst, rl.Vector2(0.0, 0.0), 0.0, rl.WHITE)

    def _monster_style(self, monster: MonsterView) -> tuple[str, RGBA]:
        match monster.kind:
            case Boss():
                return "boss", BOSS_COLOR
            case Elite():
                return "elite", ELITE_COLOR
            case Minion(requirement=MinionRequirement.CHARGED):
                return "minion", CHARGED_MINION_COLOR
            case Minion():
                return "minion", MINION_COLOR
            case _:
                return "monster", MONSTER_COLOR

    def _draw_monster(self, monster: MonsterView, snapshot: WorldSnapshot) -> None:
        key, color = self._monster_style(monster)
        bob = math.sin(monster.walk_phase) * 2.0
        pos = Vec2(monster.pos.x, monster.pos.y + bob)
        if monster.hit_flash:
            color = RGBA(1.0, 1.0, 1.0, 1.0)
        self._draw_sprite(key, pos, monster.size, color)
        if monster.has_dot:
            rl.draw_circle_lines(int(pos.x), int(pos.y + HUD_HEIGHT), monster.size * 0.6, DOT_COLOR)

        bar_w = monster.size
        x = int(pos.x - bar_w * 0.5)
        y = int(pos.y + HUD_HEIGHT - monster.size * 0.5 - 8)
        ratio = max(0.0, min(1.0, monster.health / monster.max_health)) if monster.max_health > 0 else 0.0
        rl.draw_rectangle(x, y, int(bar_w), 4, HEALTH_BG)
        rl.draw_rectangle(x, y, int(bar_w * ratio), 4, HEALTH_FG)

        boss = snapshot.boss
        if isinstance(monster.kind, Boss) and boss is not None:
            ring = VULNERABLE_COLOR if boss.vulnerable else SHIELD_COLOR
            rl.draw_circle_lines(int(pos.x), int(pos.y + HUD_HEIGHT), monster.size * 0.75, ring)

    def _draw_hud(self, snapshot: WorldSnapshot) -> None:
        rl.draw_rectangle(0, 0, int(GAME_WIDTH), HUD_HEIGHT, HUD_COLOR)
        minutes, seconds = divmod(max(0, snapshot.time_left), 60)
        rl.draw_text(f"Level {snapshot.level}/{snapshot.max_level}", 16, 12, 20, TEXT_COLOR)
        rl.draw_text(f"Time {minutes}:{seconds:02d}", 200, 12, 20, TEXT_COLOR)
        rl.draw_text(f"Score {snapshot.score}", 360, 12, 20, TEXT_COLOR)
        rl.draw_text(f"Kills {snapshot.kills}", 520, 12, 20, TEXT_COLOR)
        boss = snapshot.boss
        if boss is not None:
            if boss.vulnerable:
                status = f"VULNERABLE {boss.vulnerable_timer_ms / 1000.0:.1f}s"
            elif boss.minions_alive:
                status = f"minions {boss.minions_alive}"
            else:
                status = f"shield {boss.shield_hits} charged {boss.charged_hits} phase {boss.phase}"
            rl.draw_text(status, 16, 38, 16, VULNERABLE_COLOR if boss.vulnerable else SHIELD_COLOR)

    def _draw_charge_bar(self, snapshot: WorldSnapshot) -> None:
        if snapshot.charge_held_ms <= 0.0:
            return
        full_ms = CHARGE_THRESHOLD_MS + CHARGE_LEVEL_INTERVAL_MS * float(MAX_CHARGE_LEVEL - 1)
        ratio = min(1.0, snapshot.charge_held_ms / full_ms)
        pos = snapshot.avatar_pos
        x = int(pos.x - 25)
        y = int(pos.y + HUD_HEIGHT + PLAYER_SIZE * 0.5 + 6)
        rl.draw_rectangle(x, y, 50, 6, HEALTH_BG)
        rl.draw_rectangle(x, y, int(50 * ratio), 6, VULNERABLE_COLOR if snapshot.charge_level else HINT_COLOR)
        if snapshot.charge_level:
            rl.draw_text(f"x{snapshot.charge_level}", x + 54, y - 4, 14, VULNERABLE_COLOR)

    def _draw_fx(self, snapshot: WorldSnapshot) -> None:
        for particle in snapshot.particles:
            r, g, b, _ = particle.color
            color = RGBA(r, g, b, max(0.0, min(1.0, particle.life))).to_rl()
            center = _arena(particle.pos)
            if particle.shape == int(ParticleShape.CIRCLE):
                rl.draw_circle_v(center, particle.size, color)
            else:
                rect = rl.Rectangle(center.x, center.y, particle.size, particle.size)
                rotation = math.degrees(particle.rotation)
                rl.draw_rectangle_pro(rect, rl.Vector2(particle.size * 0.5, particle.size * 0.5), rotation, color)
        for number in snapshot.damage_numbers:
            alpha = int(255 * max(0.0, min(1.0, number.life)))
            size = 20 if number.critical else 14
            color = rl.Color(255, 60, 60, alpha) if number.critical else rl.Color(255, 255, 255, alpha)
            text = str(number.damage)
            width = rl.measure_text(text, size)
            rl.draw_text(text, int(number.pos.x - width / 2), int(number.pos.y + HUD_HEIGHT), size, color)

    def _draw_panel(self, title: str, lines: list[str]) -> None:
        w, h = 420, 60 + 26 * len(lines)
        x = int((GAME_WIDTH - w) / 2)
        y = int(HUD_HEIGHT + (GAME_HEIGHT - h) / 2)
        rl.draw_rectangle(x, y, w, h, rl.Color(0, 0, 0, 200))
        rl.draw_rectangle_lines(x, y, w, h, TEXT_COLOR)
        rl.draw_text(title, x + 20, y + 16, 24, TEXT_COLOR)
        for index, line in enumerate(lines):
            rl.draw_text(line, x + 20, y + 52 + index * 26, 18, HINT_COLOR)

    def draw(self) -> None:
        snapshot = self._snapshot
        rl.clear_background(BG_COLOR)
        rl.draw_rectangle(0, HUD_HEIGHT, int(GAME_WIDTH), int(GAME_HEIGHT), ARENA_COLOR)

        for monster in snapshot.monsters:
            self._draw_monster(monster, snapshot)
        for projectile in snapshot.projectiles:
            color = PROJECTILE_COLORS.get(projectile.kind, PROJECTILE_COLORS[ProjectileKind.DEFAULT])
            radius = 5.0 + 2.0 * float(projectile.charge_level)
            rl.draw_circle_v(_arena(projectile.pos), radius, color.to_rl())
            if projectile.explosion_radius is not None:
                rl.draw_circle_lines(
                    int(projectile.pos.x),
                    int(projectile.pos.y + HUD_HEIGHT),
                    projectile.explosion_radius,
                    color.with_alpha(0.5).to_rl(),
                )

        self._draw_sprite("player", snapshot.avatar_pos, PLAYER_SIZE, self._player_color)
        tip = snapshot.avatar_pos + Vec2.from_polar(snapshot.aim_angle, PLAYER_SIZE)
        rl.draw_line_v(_arena(snapshot.avatar_pos), _arena(tip), TEXT_COLOR)
        self._draw_charge_bar(snapshot)
        self._draw_fx(snapshot)
        self._draw_hud(snapshot)

        match snapshot.phase:
            case RunPhase.READY:
                self._draw_panel(
                    "Ready?",
                    [
                        "Survive 6 levels and defeat the boss.",
                        "WASD / arrows: move    mouse: aim",
                        "Hold SPACE or mouse to charge",
                        "ENTER: start    ESC: leave",
                    ],
                )
            case RunPhase.FINISHED:
                result = self._session.result
                if result is None:
                    self._draw_panel("Run cancelled", ["ENTER: close"])
                    return
                outcome = "Victory!" if result.success else "Defeat"
                self._draw_panel(
                    outcome,
                    [
                        f"Waves {result.waves_completed}/{result.total_waves}   Score {result.score}",
                        f"XP +{result.rewards.xp}   Coins +{result.rewards.coins}",
                        f"Item: {result.rewards.equipment_id or 'none'}",
                        "ENTER: close",
                    ],
                )
            case _:
                pass
