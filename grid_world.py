"""
Read-only grid adapter shared by every ghost.

The level collaborator owns the cell grid; ghosts only ever query it through
this class. Tiles are (x, y) tuples, the grid is stored row-major as cells[y, x].
"""

import numpy as np

import config

# Canonical cell vocabulary
PATH = 0
WALL = 1
GHOST_HOUSE = 2
DOT = 3
POWER_PELLET = 4
GHOST_DOOR = 5

LAYOUT_CHARS = {
    '#': WALL,
    ' ': PATH,
    '.': DOT,
    'O': POWER_PELLET,
    'G': GHOST_HOUSE,
    'D': GHOST_DOOR,
    'P': PATH,  # Player start
    'M': PATH,  # Monster spawn
}

# Canonical neighbor expansion order: +x, -x, +y, -y
NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class GridWorld:
    def __init__(self, cells):
        self.cells = self._to_array(cells)
        self.height, self.width = self.cells.shape

    @staticmethod
    def _to_array(cells):
        """Convert rows of cell codes to a 2D int array; ragged/empty input becomes 0x0"""
        if isinstance(cells, np.ndarray):
            if cells.ndim == 2 and cells.size > 0:
                return cells.astype(int, copy=True)
            return np.zeros((0, 0), dtype=int)

        rows = [list(row) for row in cells] if cells is not None else []
        if not rows or not rows[0] or any(len(row) != len(rows[0]) for row in rows):
            if rows and getattr(config, 'ENABLE_PATHFINDING_LOGGING', False):
                print(f"⚠️ GridWorld: malformed grid ({len(rows)} rows), every tile treated as blocked")
            return np.zeros((0, 0), dtype=int)
        return np.array(rows, dtype=int)

    def in_bounds(self, tile):
        x, y = tile
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, tile):
        """Cell code at tile; out of bounds reads as a wall"""
        if not self.in_bounds(tile):
            return WALL
        x, y = tile
        return int(self.cells[y, x])

    def walkable(self, tile):
        # Walls are the only cells ghosts cannot stand on
        return self.in_bounds(tile) and self.cell_at(tile) != WALL

    def in_ghost_house(self, tile):
        return self.cell_at(tile) == GHOST_HOUSE

    def is_ghost_door(self, tile):
        return self.cell_at(tile) == GHOST_DOOR

    def neighbors(self, tile):
        """Walkable 4-connected neighbors in canonical order"""
        x, y = tile
        result = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nxt = (x + dx, y + dy)
            if self.walkable(nxt):
                result.append(nxt)
        return result

    def open_neighbor_count(self, tile):
        return len(self.neighbors(tile))

    def ghost_doors(self):
        """All ghost door tiles in row-major order"""
        ys, xs = np.nonzero(self.cells == GHOST_DOOR)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def clamp(self, tile):
        if self.width == 0 or self.height == 0:
            return tile
        x, y = tile
        return (min(max(x, 0), self.width - 1), min(max(y, 0), self.height - 1))


def parse_layout(lines):
    """
    Parse an ASCII level layout.

    Args:
        lines: list of equal-length strings using the LAYOUT_CHARS vocabulary

    Returns:
        (GridWorld, monster spawn tiles in row-major order, player start or None)
    """
    rows = []
    spawns = []
    player_start = None
    for y, line in enumerate(lines):
        row = []
        for x, char in enumerate(line):
            if char == 'M':
                spawns.append((x, y))
            elif char == 'P':
                player_start = (x, y)
            row.append(LAYOUT_CHARS.get(char, PATH))
        rows.append(row)
    return GridWorld(rows), spawns, player_start
