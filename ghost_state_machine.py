"""
Per-ghost finite state machine: Patrol, Chase, Return and Stunned.

Transitions are evaluated once per tick in a fixed priority order:
house containment, house exit, power reaction, spawn delay, stun recovery,
perception gate, then the Patrol/Chase/Return rules. Type-specific choices
(chase target, Return usage, unreachable-target fallback) come from the
behaviour records in targeting_policy.
"""

import config
from ghost_types import GhostState
from targeting_policy import behavior_for


class GhostStateMachine:
    def __init__(self, grid, pathfinder, patrol_generator):
        self.grid = grid
        self.pathfinder = pathfinder
        self.patrol_generator = patrol_generator

    # ============================================================================
    # MAIN UPDATE
    # ============================================================================

    def update(self, ghost, player, red_position, dt):
        """
        Recompute the ghost's intent for this tick.

        Args:
            ghost: Ghost record (mutated in place)
            player: PlayerSnapshot or None before the first snapshot
            red_position: Red's start-of-tick tile, or None without a Red ghost
            dt: tick duration in seconds
        """
        in_house = self.grid.in_ghost_house(ghost.position)

        # 1. House containment
        if in_house and ghost.spawn_delay > 0:
            self._contain_in_house(ghost)
            return

        # 2. House exit
        if in_house:
            self._exit_house(ghost)
            return

        powered = player is not None and player.is_powered
        behavior = behavior_for(ghost.ghost_type)

        # 3. Power reaction
        if powered:
            if ghost.state not in (GhostState.STUNNED, GhostState.RETURN):
                self._set_state(ghost, GhostState.STUNNED)
                ghost.clear_path()
            if ghost.state == GhostState.STUNNED:
                # Held at full strength while powered, counts down afterwards
                ghost.stun_timer = getattr(config, 'STUN_RECOVERY_TIME', 1.0)
            else:
                self._continue_return(ghost)
            return

        if ghost.state == GhostState.STUNNED:
            ghost.stun_timer -= dt
            if ghost.stun_timer <= 0.0:
                self._recover_from_stun(ghost, behavior)
            return

        if ghost.spawn_delay > 0 or player is None:
            if ghost.state == GhostState.RETURN:
                self._continue_return(ghost)
            else:
                self._maintain_patrol(ghost)
            return

        # 4. Perception gate
        distance = self.pathfinder.path_distance(ghost.position, player.tile, ghost.perception_range)
        in_range = distance is not None

        # 5./6. Patrol <-> Chase, Return
        if in_range:
            self._chase(ghost, player, red_position, behavior)
        elif ghost.state == GhostState.CHASE:
            self._lose_player(ghost)
        elif ghost.state == GhostState.RETURN:
            self._continue_return(ghost)
        else:
            self._maintain_patrol(ghost)

    # ============================================================================
    # GHOST HOUSE
    # ============================================================================

    def _contain_in_house(self, ghost):
        needs_loop = ghost.state != GhostState.PATROL or not ghost.patrol_confined or not ghost.patrol_loop
        self._set_state(ghost, GhostState.PATROL)
        if needs_loop:
            ghost.clear_path()
            ghost.patrol_loop = self.patrol_generator.generate_loop(ghost.position, confine_to_house=True)
            ghost.patrol_index = 0
            ghost.patrol_confined = True

    def _exit_house(self, ghost):
        if ghost.state != GhostState.PATROL:
            self._set_state(ghost, GhostState.PATROL)
            ghost.clear_path()
        if ghost.has_path():
            return
        ghost.set_path(self.house_exit_path(ghost.position))

    def house_exit_path(self, position):
        """Path out of the ghost house: an adjacent outside tile, else the nearest door"""
        for neighbor in self.pathfinder.enterable_neighbors(position):
            if not self.grid.in_ghost_house(neighbor):
                return [neighbor]

        result = self.pathfinder.find_nearest_target(position, self.grid.ghost_doors())
        if result is None:
            return []
        return result['path']

    # ============================================================================
    # CHASE / RETURN / PATROL
    # ============================================================================

    def _chase(self, ghost, player, red_position, behavior):
        if ghost.state != GhostState.CHASE:
            self._set_state(ghost, GhostState.CHASE)

        target = behavior.chase_target(ghost, player, red_position, self.grid)
        path = self.pathfinder.shortest_path(ghost.position, target)
        if path:
            # Stale paths are replaced, never repaired
            ghost.set_path(path)
            return

        if target == ghost.position:
            ghost.clear_path()
            return

        # Target unreachable: stay on the current activity
        if self._path_attached(ghost):
            return
        ghost.clear_path()
        if not behavior.keeps_chasing_when_unreachable:
            self._start_return(ghost)

    def _lose_player(self, ghost):
        self._set_state(ghost, GhostState.PATROL)
        ghost.clear_path()
        self._maintain_patrol(ghost)

    def _recover_from_stun(self, ghost, behavior):
        ghost.stun_timer = 0.0
        ghost.clear_path()
        if behavior.uses_return:
            self._start_return(ghost)
        else:
            self._set_state(ghost, GhostState.PATROL)
            self._maintain_patrol(ghost)

    def _start_return(self, ghost):
        if self.grid.is_ghost_door(ghost.position):
            # Leave the doorway first; the outside loop is built once clear of it
            result = self.pathfinder.find_nearest_matching(ghost.position, self._is_outside_tile)
            if result is None:
                self._set_state(ghost, GhostState.PATROL)
                ghost.clear_path()
                return
            self._set_state(ghost, GhostState.RETURN)
            ghost.set_path(result['path'])
            return

        self._ensure_outside_loop(ghost)
        result = self.pathfinder.find_nearest_target(ghost.position, ghost.patrol_loop)
        if result is None or result['distance'] == 0:
            self._set_state(ghost, GhostState.PATROL)
            ghost.clear_path()
            return
        self._set_state(ghost, GhostState.RETURN)
        ghost.set_path(result['path'])

    def _continue_return(self, ghost):
        if ghost.position in ghost.patrol_loop:
            self._set_state(ghost, GhostState.PATROL)
            ghost.clear_path()
            ghost.patrol_index = ghost.patrol_loop.index(ghost.position)
            return
        if ghost.has_path():
            return
        # Return path exhausted without reaching the loop
        self._start_return(ghost)

    def _maintain_patrol(self, ghost):
        """Keep a Patrol ghost on a usable loop outside the house"""
        if self.grid.is_ghost_door(ghost.position):
            # Finish stepping out of the doorway before building an outside loop
            if not ghost.has_path():
                result = self.pathfinder.find_nearest_matching(ghost.position, self._is_outside_tile)
                ghost.set_path(result['path'] if result else [])
            return

        self._ensure_outside_loop(ghost)
        if ghost.has_path() or not ghost.patrol_loop or ghost.position in ghost.patrol_loop:
            return

        result = self.pathfinder.find_nearest_target(ghost.position, ghost.patrol_loop)
        if result is not None:
            ghost.set_path(result['path'])

    def _ensure_outside_loop(self, ghost):
        if ghost.patrol_loop and not ghost.patrol_confined:
            return
        if self.grid.is_ghost_door(ghost.position):
            return
        ghost.patrol_loop = self.patrol_generator.generate_loop(ghost.position)
        ghost.patrol_index = 0
        ghost.patrol_confined = False

    def _is_outside_tile(self, tile):
        return not self.grid.in_ghost_house(tile) and not self.grid.is_ghost_door(tile)

    # ============================================================================
    # HELPERS
    # ============================================================================

    def _path_attached(self, ghost):
        """Whether the remaining active path still starts at or next to the ghost"""
        if not ghost.has_path():
            return False
        nx, ny = ghost.active_path[ghost.path_index]
        x, y = ghost.position
        return abs(nx - x) + abs(ny - y) <= 1

    def _set_state(self, ghost, new_state):
        if ghost.state == new_state:
            return
        if getattr(config, 'ENABLE_GHOST_AI_LOGGING', False):
            print(f"👻 {ghost.name}: {ghost.state.name} -> {new_state.name} at {ghost.position}")
        ghost.state = new_state
