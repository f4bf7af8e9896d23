"""
BFS pathfinding for ghosts on a uniform-cost grid.

Ghost doors are one-way: a door tile may only be entered from a ghost-house
tile, so ghosts can leave the house but never path back into it from outside.
"""

from collections import deque

import config
from grid_world import NEIGHBOR_OFFSETS


class GhostPathFinder:
    def __init__(self, grid):
        self.grid = grid

        # Statistics
        self.stats = {
            'searches': 0,
            'nodes_explored': 0,
            'unreachable': 0,
        }

    def can_enter(self, from_tile, to_tile):
        """Whether a ghost standing on from_tile may step onto to_tile"""
        if not self.grid.walkable(to_tile):
            return False
        if self.grid.is_ghost_door(to_tile):
            return self.grid.in_ghost_house(from_tile)
        return True

    def enterable_neighbors(self, tile):
        x, y = tile
        result = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nxt = (x + dx, y + dy)
            if self.can_enter(tile, nxt):
                result.append(nxt)
        return result

    def _search(self, start, is_goal, max_distance=None):
        """
        Breadth-first search from start until is_goal(tile) holds.

        Returns:
            (goal tile, parents dict) or (None, parents dict) when nothing matched
        """
        self.stats['searches'] += 1
        parents = {start: None}
        queue = deque([(start, 0)])

        while queue:
            current, distance = queue.popleft()
            self.stats['nodes_explored'] += 1

            if is_goal(current):
                return current, parents

            if max_distance is not None and distance >= max_distance:
                continue

            # The door rule is evaluated against the tile being expanded
            for neighbor in self.enterable_neighbors(current):
                if neighbor in parents:
                    continue
                parents[neighbor] = current
                queue.append((neighbor, distance + 1))

        self.stats['unreachable'] += 1
        return None, parents

    @staticmethod
    def _backtrace(parents, goal):
        path = []
        current = goal
        while parents[current] is not None:
            path.append(current)
            current = parents[current]
        path.reverse()
        return path

    def shortest_path(self, start, goal):
        """
        Shortest hop path from start to goal.

        Returns:
            list of tiles excluding start and including goal, ordered start -> goal;
            empty when start == goal or the goal cannot be reached
        """
        if start == goal or not self.grid.walkable(start) or not self.grid.walkable(goal):
            return []

        found, parents = self._search(start, lambda tile: tile == goal)
        if found is None:
            if getattr(config, 'ENABLE_PATHFINDING_LOGGING', False):
                print(f"🚫 BFS: {goal} unreachable from {start}")
            return []
        return self._backtrace(parents, found)

    def path_distance(self, start, goal, max_range):
        """Hop count from start to goal if it is at most max_range, else None"""
        if start == goal:
            return 0 if self.grid.walkable(start) else None

        max_hops = int(max_range)
        if max_hops <= 0 or not self.grid.walkable(start) or not self.grid.walkable(goal):
            return None

        found, parents = self._search(start, lambda tile: tile == goal, max_distance=max_hops)
        if found is None:
            return None
        return len(self._backtrace(parents, found))

    def find_nearest_target(self, start, targets, max_distance=None):
        """
        BFS for the closest of several targets in a single search.

        Args:
            start: (x, y) start tile
            targets: iterable of (x, y) tiles
            max_distance: optional hop limit

        Returns:
            dict {'target': tile, 'path': list of tiles excluding start, 'distance': int}
            or None if no target is reachable
        """
        target_set = set(targets)
        if not target_set:
            return None
        return self.find_nearest_matching(start, lambda tile: tile in target_set, max_distance)

    def find_nearest_matching(self, start, predicate, max_distance=None):
        """Same as find_nearest_target, with targets given as a tile predicate"""
        if not self.grid.walkable(start):
            return None

        found, parents = self._search(start, predicate, max_distance)
        if found is None:
            return None

        path = self._backtrace(parents, found)
        return {
            'target': found,
            'path': path,
            'distance': len(path),
        }

    def get_statistics(self):
        return dict(self.stats)

    def reset_statistics(self):
        for key in self.stats:
            self.stats[key] = 0
