"""
MonsterSystem - orchestrates every ghost once per tick.

Per tick: clear events, snapshot Red's start-of-tick tile, then for each
ghost advance timers, run the state machine, steer/step, and arbitrate
contact with the player. The grid is injected; handing a different grid to
advance() or reset_all() rebuilds the ghosts for the new level.
"""

import config
from collision_arbiter import CollisionArbiter
from ghost_movement import MovementResolver
from ghost_pathfinder import GhostPathFinder
from ghost_state_machine import GhostStateMachine
from ghost_types import Direction, Ghost, GhostRenderInfo, GhostState, GhostType, MonsterEvents
from grid_world import GridWorld
from patrol_loop import PatrolLoopGenerator

TRANSITION_LOG_SIZE = 256


class MonsterSystem:
    def __init__(self, grid, spawns, perception_range=None):
        self.spawns = [tuple(spawn) for spawn in spawns]
        self.perception_range = (perception_range if perception_range is not None
                                 else config.DEFAULT_PERCEPTION_RANGE)

        self.player = None
        self.previous_player_tile = None
        self.events = MonsterEvents()

        self.tick = 0
        self.transition_log = []  # Recent state transitions for debugging / scenario checks

        self._build(grid)

    def _build(self, grid):
        self._grid_source = grid
        self.grid = grid if isinstance(grid, GridWorld) else GridWorld(grid)
        self.pathfinder = GhostPathFinder(self.grid)
        self.patrol_generator = PatrolLoopGenerator(self.pathfinder)
        self.state_machine = GhostStateMachine(self.grid, self.pathfinder, self.patrol_generator)
        self.movement = MovementResolver(self.grid, self.pathfinder)
        self.arbiter = CollisionArbiter(self.respawn_ghost)

        self._ghosts = []
        first_delay = config.FIRST_SPAWN_DELAY
        delay_step = config.SPAWN_DELAY_STEP
        for i, spawn in enumerate(self.spawns):
            ghost = Ghost(
                index=i,
                ghost_type=GhostType.for_spawn_index(i),
                position=spawn,
                spawn_position=spawn,
                perception_range=self.perception_range,
            )
            self._reset_ghost(ghost, spawn_delay=first_delay + i * delay_step)
            self._ghosts.append(ghost)

    # ============================================================================
    # PUBLIC INTERFACE
    # ============================================================================

    @property
    def ghosts(self):
        return tuple(self._ghosts)

    def set_player_snapshot(self, snapshot):
        """Called once per tick while the player is interactive"""
        self.previous_player_tile = self.player.tile if self.player is not None else snapshot.tile
        self.player = snapshot

    def advance(self, dt, grid=None):
        if grid is not None and grid is not self._grid_source:
            if getattr(config, 'ENABLE_GHOST_AI_LOGGING', False):
                print("🔄 MonsterSystem: grid changed, rebuilding ghosts")
            self._build(grid)

        self.events.reset()
        self.tick += 1

        # Yellow targets off Red's position before anyone moves this tick
        red = self.red_ghost()
        red_position = red.position if red is not None else None

        wrap = config.ANIM_TIMER_WRAP
        for ghost in self._ghosts:
            if ghost.spawn_delay > 0.0:
                ghost.spawn_delay -= dt

            ghost.anim_timer += dt
            if ghost.anim_timer >= wrap:
                ghost.anim_timer -= wrap

            state_before = ghost.state
            self.state_machine.update(ghost, self.player, red_position, dt)
            self._record_transition(ghost, state_before)

            if not self.movement.advance_ghost(ghost, self.player, dt):
                continue
            if self.player is None:
                continue

            state_before = ghost.state
            self.arbiter.arbitrate(ghost, self.player, self.previous_player_tile, self.events)
            self._record_transition(ghost, state_before)

        # A withheld snapshot means the player did not move next tick
        if self.player is not None:
            self.previous_player_tile = self.player.tile

    def render_info(self):
        frame_duration = config.ANIM_FRAME_DURATION
        frame_count = config.ANIM_FRAME_COUNT
        return [
            GhostRenderInfo(
                tile=ghost.position,
                facing=ghost.facing,
                state=ghost.state,
                anim_frame=int(ghost.anim_timer / frame_duration) % frame_count,
                ghost_type=ghost.ghost_type,
            )
            for ghost in self._ghosts
        ]

    def poll_events(self):
        return MonsterEvents(player_hit=self.events.player_hit)

    def reset_all(self, grid=None):
        """Put every ghost back on its spawn tile (after the player loses a life)"""
        if grid is not None and grid is not self._grid_source:
            self._build(grid)
        else:
            for ghost in self._ghosts:
                self._reset_ghost(ghost, spawn_delay=config.RESET_SPAWN_DELAY)

        self.player = None
        self.previous_player_tile = None
        self.events.reset()

    def respawn_ghost(self, ghost):
        """Send an eaten ghost back to its spawn tile"""
        self._reset_ghost(ghost, spawn_delay=config.RESPAWN_SPAWN_DELAY)

    def red_ghost(self):
        for ghost in self._ghosts:
            if ghost.ghost_type == GhostType.RED:
                return ghost
        return None

    def get_statistics(self):
        stats = dict(self.arbiter.stats)
        stats.update(self.pathfinder.get_statistics())
        stats['ticks'] = self.tick
        return stats

    # ============================================================================
    # HELPERS
    # ============================================================================

    def _reset_ghost(self, ghost, spawn_delay):
        ghost.position = ghost.spawn_position
        ghost.previous_position = ghost.spawn_position
        ghost.facing = Direction.RIGHT
        ghost.state = GhostState.PATROL
        ghost.spawn_delay = spawn_delay
        ghost.clear_path()
        ghost.patrol_loop, ghost.patrol_confined = self.patrol_generator.loop_for(ghost.spawn_position)
        ghost.patrol_index = 0
        ghost.stun_timer = 0.0
        ghost.move_timer = 0.0
        ghost.hit_freeze_ticks = 0

    def _record_transition(self, ghost, state_before):
        if ghost.state == state_before:
            return
        self.transition_log.append({
            'tick': self.tick,
            'ghost': ghost.index,
            'from': state_before,
            'to': ghost.state,
            'position': ghost.position,
            'path': list(ghost.active_path[ghost.path_index:]),
            'player': self.player.tile if self.player is not None else None,
        })
        if len(self.transition_log) > TRANSITION_LOG_SIZE:
            self.transition_log.pop(0)
