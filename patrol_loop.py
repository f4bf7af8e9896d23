"""
Patrol loop generation by right-hand wall following.

A ghost that is not engaged walks a closed loop produced here, so levels do
not need hand-authored patrol waypoints.
"""

import config
from ghost_types import Direction, step
from path_validator import PathValidator


class PatrolLoopGenerator:
    def __init__(self, pathfinder):
        self.pathfinder = pathfinder
        self.grid = pathfinder.grid
        self.validator = PathValidator(pathfinder)

    def _can_walk(self, current, nxt, confine_to_house):
        if confine_to_house:
            return self.grid.in_ghost_house(nxt)
        return self.pathfinder.can_enter(current, nxt)

    def generate_loop(self, start, confine_to_house=False):
        """
        Walk from start keeping the wall on the right hand side.

        Returns:
            list of tiles beginning with start; ends with start again when the
            walk closed, otherwise the partial walk (stuck or step cap reached)
        """
        if not self.grid.walkable(start):
            return []

        loop = [start]
        pos = start
        heading = Direction.RIGHT
        max_steps = getattr(config, 'PATROL_LOOP_MAX_STEPS', 10000)

        for _ in range(max_steps):
            for candidate in (heading.turn_right(), heading, heading.turn_left(), heading.reverse()):
                nxt = step(pos, candidate)
                if self._can_walk(pos, nxt, confine_to_house):
                    pos = nxt
                    heading = candidate
                    loop.append(pos)
                    break
            else:
                # Stuck: isolated tile
                return loop

            if pos == start:
                break
        else:
            if getattr(config, 'ENABLE_PATHFINDING_LOGGING', False):
                print(f"⚠️ Patrol loop from {start} hit the {max_steps} step cap, using partial walk")

        if getattr(config, 'STRICT_PATH_VALIDATION', False) and not self.validator.validate_loop(loop):
            if getattr(config, 'ENABLE_PATHFINDING_LOGGING', False):
                print(f"⚠️ Patrol loop from {start} failed validation")

        return loop

    def loop_for(self, tile):
        """Patrol loop for a ghost standing on tile; confined when inside the house"""
        confine = self.grid.in_ghost_house(tile)
        return self.generate_loop(tile, confine_to_house=confine), confine
