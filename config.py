"""
Global configuration for ghost AI rules and behaviors.
"""

# Movement Speed Settings (tiles per second - independent of FPS)
# Ghosts take at most one tile-step per tick, so speed is capped by the frame rate
GHOST_MOVE_SPEED = 3.5  # Slightly slower than the player (4.0)

# Perception: maximum BFS hop distance at which a ghost notices the player
DEFAULT_PERCEPTION_RANGE = 8

# Spawn / re-engagement delays (seconds)
FIRST_SPAWN_DELAY = 2.0   # Red waits 2s, Yellow 4s, Blue 6s, ...
SPAWN_DELAY_STEP = 2.0
RESET_SPAWN_DELAY = 1.0   # After the player loses a life
RESPAWN_SPAWN_DELAY = 1.0  # After a ghost has been eaten

# Stun settings
STUN_RECOVERY_TIME = 1.0  # Dazed time after power ends before ghosts regroup

# Collision settings
HIT_FREEZE_TICKS = 1  # Movement steps skipped after a hit (prevents double counting)

# Targeting
YELLOW_LOOKAHEAD = 2  # Tiles ahead of the player used as the ambush anchor

# Patrol loop generation
PATROL_LOOP_MAX_STEPS = 10000  # Safety cap for wall-following on odd geometry

# Animation
ANIM_FRAME_DURATION = 0.3  # Seconds per animation frame
ANIM_FRAME_COUNT = 4
ANIM_TIMER_WRAP = ANIM_FRAME_DURATION * ANIM_FRAME_COUNT * 10  # Keeps frame sequence seamless

# Optional validation: check generated patrol loops step by step
STRICT_PATH_VALIDATION = True

# Logging and Debugging
ENABLE_GHOST_AI_LOGGING = False     # State transitions, respawns, hits
ENABLE_PATHFINDING_LOGGING = False  # Unreachable searches, capped patrol walks
