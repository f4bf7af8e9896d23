"""
Shared data model for the ghost AI: directions, states, ghost records,
player snapshots, render records and the per-tick event poll.
"""

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    RIGHT = (1, 0)
    UP = (0, -1)
    LEFT = (-1, 0)
    DOWN = (0, 1)
    NONE = (0, 0)

    @property
    def delta(self):
        return self.value

    def turn_right(self):
        return _TURN_RIGHT[self]

    def turn_left(self):
        return _TURN_LEFT[self]

    def reverse(self):
        return _REVERSE[self]

    @classmethod
    def from_delta(cls, delta):
        """Direction for a unit step; anything else maps to NONE"""
        for direction in (cls.RIGHT, cls.UP, cls.LEFT, cls.DOWN):
            if direction.value == tuple(delta):
                return direction
        return cls.NONE


_TURN_RIGHT = {
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
    Direction.UP: Direction.RIGHT,
    Direction.NONE: Direction.NONE,
}
_TURN_LEFT = {v: k for k, v in _TURN_RIGHT.items() if k is not Direction.NONE}
_TURN_LEFT[Direction.NONE] = Direction.NONE
_REVERSE = {
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.NONE: Direction.NONE,
}


def step(tile, direction):
    dx, dy = direction.delta
    return (tile[0] + dx, tile[1] + dy)


class GhostState(Enum):
    PATROL = 'patrol'
    CHASE = 'chase'
    RETURN = 'return'
    STUNNED = 'stunned'


class GhostType(Enum):
    RED = 'red'
    YELLOW = 'yellow'
    BLUE = 'blue'

    @classmethod
    def for_spawn_index(cls, index):
        # Spawn order: 0 = Red, 1 = Yellow, others = Blue
        if index == 0:
            return cls.RED
        if index == 1:
            return cls.YELLOW
        return cls.BLUE


@dataclass(frozen=True)
class PlayerSnapshot:
    grid_x: int
    grid_y: int
    facing: Direction = Direction.RIGHT
    is_powered: bool = False

    @property
    def tile(self):
        return (self.grid_x, self.grid_y)


@dataclass
class Ghost:
    index: int
    ghost_type: GhostType
    position: tuple
    spawn_position: tuple
    previous_position: tuple = None
    facing: Direction = Direction.RIGHT
    state: GhostState = GhostState.PATROL
    perception_range: float = 8.0
    spawn_delay: float = 0.0

    patrol_loop: list = field(default_factory=list)
    patrol_index: int = 0
    patrol_confined: bool = False

    active_path: list = field(default_factory=list)  # Current BFS result (chase / return / exit / rejoin)
    path_index: int = 0

    stun_timer: float = 0.0
    anim_timer: float = 0.0
    move_timer: float = 0.0
    step_counter: int = 0
    hit_freeze_ticks: int = 0

    def __post_init__(self):
        if self.previous_position is None:
            self.previous_position = self.position

    @property
    def name(self):
        return f"{self.ghost_type.name.title()}#{self.index}"

    def has_path(self):
        return self.path_index < len(self.active_path)

    def set_path(self, path):
        self.active_path = list(path)
        self.path_index = 0

    def clear_path(self):
        self.active_path = []
        self.path_index = 0


@dataclass(frozen=True)
class GhostRenderInfo:
    tile: tuple
    facing: Direction
    state: GhostState
    anim_frame: int
    ghost_type: GhostType


@dataclass
class MonsterEvents:
    player_hit: bool = False

    def reset(self):
        self.player_hit = False
