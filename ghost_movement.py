"""
Local steering: turns the state machine's intent (path, patrol loop or
evasion) into a heading, then advances at most one tile per tick on a fixed
movement cadence.
"""

import config
from ghost_types import Direction, GhostState, step

# Same order as the BFS expansion: +x, -x, +y, -y
CANONICAL_DIRECTIONS = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)


class MovementResolver:
    def __init__(self, grid, pathfinder):
        self.grid = grid
        self.pathfinder = pathfinder

    def advance_ghost(self, ghost, player, dt):
        """
        Steer and (on cadence) step one ghost.

        Returns:
            True if the ghost is active this tick and its contact with the
            player must be arbitrated, False if it was frozen or dazed
        """
        ghost.previous_position = ghost.position

        if ghost.hit_freeze_ticks > 0:
            ghost.hit_freeze_ticks -= 1
            return False

        powered = player is not None and player.is_powered
        if ghost.state == GhostState.STUNNED and not powered:
            # Dazed until the stun timer runs out
            return False

        heading = self.choose_heading(ghost, player)
        if self._holds_position(ghost, powered):
            return True
        ghost.facing = heading

        ghost.move_timer += dt
        if ghost.move_timer >= 1.0 / config.GHOST_MOVE_SPEED:
            ghost.move_timer = 0.0
            self._try_step(ghost)
        return True

    # ============================================================================
    # HEADING SELECTION
    # ============================================================================

    def choose_heading(self, ghost, player):
        pos = ghost.position
        desired = ghost.facing
        self._consume_waypoints(ghost)

        if ghost.state == GhostState.STUNNED and player is not None and player.is_powered:
            desired = self.evasive_heading(pos, player.tile, ghost.facing)
        elif ghost.has_path():
            desired = self._path_heading(ghost)
        elif ghost.state == GhostState.PATROL and ghost.patrol_loop:
            desired = self._patrol_heading(ghost)

        # Dead end: turn around
        if self.grid.open_neighbor_count(pos) <= 1:
            desired = ghost.facing.reverse()

        return self._correct_corner(pos, desired)

    @staticmethod
    def _holds_position(ghost, powered):
        """Nothing to follow: stay put with the current facing"""
        if ghost.state == GhostState.STUNNED and powered:
            return False
        if ghost.has_path():
            return False
        return not (ghost.state == GhostState.PATROL and ghost.patrol_loop)

    def evasive_heading(self, pos, player_tile, fallback):
        """Greedy evasion: the enterable neighbor farthest (squared Euclidean) from the player"""
        best = None
        best_distance = -1
        px, py = player_tile
        for direction in CANONICAL_DIRECTIONS:
            nx, ny = step(pos, direction)
            if not self.pathfinder.can_enter(pos, (nx, ny)):
                continue
            distance = (nx - px) ** 2 + (ny - py) ** 2
            if distance > best_distance:
                best = direction
                best_distance = distance
        return best if best is not None else fallback

    def _path_heading(self, ghost):
        pos = ghost.position
        nxt = ghost.active_path[ghost.path_index]
        path_dir = Direction.from_delta((nxt[0] - pos[0], nxt[1] - pos[1]))
        if path_dir == Direction.NONE:
            # Ghost drifted off its path; the state machine replans next tick
            ghost.clear_path()
            return ghost.facing

        if path_dir == ghost.facing:
            return path_dir

        open_dirs = [d for d in CANONICAL_DIRECTIONS if self.grid.walkable(step(pos, d))]
        forward_blocked = not self.pathfinder.can_enter(pos, step(pos, ghost.facing))
        is_intersection = len(open_dirs) >= 3
        aligned_corner = len(open_dirs) == 2 and path_dir in open_dirs

        # Only turn at genuine decision points
        if is_intersection or forward_blocked or aligned_corner:
            return path_dir
        return ghost.facing

    def _patrol_heading(self, ghost):
        pos = ghost.position
        loop = ghost.patrol_loop
        if ghost.patrol_index >= len(loop):
            ghost.patrol_index = 0

        waypoint = loop[ghost.patrol_index]
        if waypoint != pos and not self._adjacent(waypoint, pos) and pos in loop:
            # Re-sync the cursor after leaving the loop (chase, return, rejoin)
            ghost.patrol_index = loop.index(pos)

        for _ in range(len(loop)):
            if loop[ghost.patrol_index] != pos:
                break
            ghost.patrol_index = (ghost.patrol_index + 1) % len(loop)

        nxt = loop[ghost.patrol_index]
        patrol_dir = Direction.from_delta((nxt[0] - pos[0], nxt[1] - pos[1]))
        if patrol_dir == Direction.NONE:
            return ghost.facing
        return patrol_dir

    def _correct_corner(self, pos, heading):
        """If the heading runs into a wall or a door from outside, try right, left, then reverse"""
        if heading == Direction.NONE:
            return heading
        if self.pathfinder.can_enter(pos, step(pos, heading)):
            return heading
        for candidate in (heading.turn_right(), heading.turn_left(), heading.reverse()):
            if self.pathfinder.can_enter(pos, step(pos, candidate)):
                return candidate
        return heading

    # ============================================================================
    # STEPPING
    # ============================================================================

    def _try_step(self, ghost):
        if ghost.facing == Direction.NONE:
            return False
        nxt = step(ghost.position, ghost.facing)
        if not self.pathfinder.can_enter(ghost.position, nxt):
            # Hold position; the heading is kept for the next attempt
            return False
        ghost.position = nxt
        ghost.step_counter += 1
        self._consume_waypoints(ghost)
        return True

    @staticmethod
    def _consume_waypoints(ghost):
        while ghost.has_path() and ghost.active_path[ghost.path_index] == ghost.position:
            ghost.path_index += 1
        if ghost.active_path and not ghost.has_path():
            ghost.clear_path()

    @staticmethod
    def _adjacent(a, b):
        return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
