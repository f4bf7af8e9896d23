#!/usr/bin/env python3
"""
Path validation utility to ensure ghosts never step through walls or doors
"""

import config


class PathValidator:
    def __init__(self, pathfinder):
        self.pathfinder = pathfinder
        self.grid = pathfinder.grid

    def is_position_valid(self, pos):
        """Check if a position is valid (within bounds and not a wall)"""
        return self.grid.walkable(pos)

    def are_adjacent(self, pos1, pos2):
        """Check if two positions are adjacent (4-connected)"""
        x1, y1 = pos1
        x2, y2 = pos2

        dx = abs(x1 - x2)
        dy = abs(y1 - y2)

        # Must be exactly 1 step away in 4-directions
        return (dx == 1 and dy == 0) or (dx == 0 and dy == 1)

    def validate_path_strict(self, path, start=None):
        """
        Strictly validate a ghost path: walkable tiles, adjacent steps and
        door entries only from inside the ghost house.

        Args:
            path: list of tiles
            start: optional tile the path departs from (not part of the path)
        """
        if not path:
            return False

        steps = ([start] if start is not None else []) + list(path)

        for pos in steps:
            if not self.is_position_valid(pos):
                self._report(f"Invalid position in path: {pos} (wall or out of bounds)")
                return False

        for pos1, pos2 in zip(steps, steps[1:]):
            if not self.are_adjacent(pos1, pos2):
                self._report(f"Non-adjacent positions in path: {pos1} -> {pos2}")
                return False
            if not self.pathfinder.can_enter(pos1, pos2):
                self._report(f"Door entered from outside the house: {pos1} -> {pos2}")
                return False

        return True

    def validate_loop(self, loop):
        """A patrol loop is valid when every step is legal; closure is checked separately"""
        if len(loop) == 1:
            return self.is_position_valid(loop[0])
        return self.validate_path_strict(loop[1:], start=loop[0])

    def is_closed_loop(self, loop):
        return len(loop) > 1 and loop[0] == loop[-1]

    @staticmethod
    def _report(message):
        if getattr(config, 'ENABLE_PATHFINDING_LOGGING', False):
            print(message)
