from __future__ import annotations

# Arena geometry (pixels).
GAME_WIDTH = 900.0
GAME_HEIGHT = 700.0
PLAYER_SIZE = 30.0
MONSTER_SIZE = 25.0
BOSS_SIZE = 40.0
PLAYER_START_X = GAME_WIDTH * 0.5
PLAYER_START_Y = GAME_HEIGHT - 100.0

TICK_RATE = 60
RUN_CLOCK_INTERVAL_MS = 1000.0
SPAWN_CHECK_INTERVAL_MS = 100.0
FX_UPDATE_INTERVAL_MS = 1000.0 / 30.0

# Run structure.
GAME_DURATION = 180  # seconds
LEVEL_DURATION = 30  # seconds
MAX_LEVEL = 6

# Movement (pixels per second).
AVATAR_MOVE_SPEED = 180.0
MONSTER_BASE_SPEED = 40.0
MONSTER_SPEED_PER_DIFFICULTY = 6.0
BOSS_SPEED_SCALE = 0.5
AIM_SMOOTHING = 0.2  # fraction of the remaining arc closed per 60 Hz tick

# Attacks.
ATTACK_RANGE = 300.0
PROJECTILE_SPEED = 480.0
AUTO_ATTACK_COOLDOWN_MS = 500.0
MIN_ATTACK_COOLDOWN_MS = 150.0
ATTACK_COOLDOWN_PER_SPEED_MS = 3.0
PROJECTILE_BOUNDS_MARGIN = 20.0

CHARGE_THRESHOLD_MS = 500.0
CHARGE_LEVEL_INTERVAL_MS = 500.0
MAX_CHARGE_LEVEL = 3
CHARGE_RANGE_STEP = 0.5
CHARGE_PIERCE_LEVEL = 2
CHARGE_EXPLOSION_LEVEL = 3
CHARGE_EXPLOSION_RADIUS = 50.0
CHARGE_SPEED_SCALE = 1.2

# Spawning.
BASE_SPAWN_DELAY_MS = 2000.0
SPAWN_DELAY_PER_LEVEL_MS = 250.0
MIN_SPAWN_DELAY_MS = 600.0
ELITE_CHANCE_PER_LEVEL = 0.05
MAX_ELITE_CHANCE = 0.5
ELITE_HEALTH_SCALE = 3.0
ELITE_SPEED_SCALE = 2.0

# Bosses.
SHIELD_HIT_THRESHOLD = 3
VULNERABLE_DURATION_MS = 15000.0
SUMMONER_CHARGED_HITS = 3
SUMMONER_MINION_COUNT = 5
SUMMONER_PHASE_DAMAGE_FRACTION = 1.0 / 3.0
WAVE_GATED_HEALTH_FRACTION = 0.6
WAVE_GATED_MINION_COUNT = 15
MINION_HEALTH = 15.0
MINION_SPAWN_RADIUS = 90.0

# Damage over time.
DOT_TICK_MS = 1000.0

# Scoring.
KILL_SCORE = 10
