import pytest
from hypothesis import HealthCheck, settings

import config
from ghost_pathfinder import GhostPathFinder
from grid_world import GridWorld, parse_layout
from patrol_loop import PatrolLoopGenerator

settings.register_profile(
    "default",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
)
settings.load_profile("default")

HOUSE_LAYOUT = [
    "#########",
    "#       #",
    "# ##D## #",
    "# #GGG# #",
    "# #GGG# #",
    "# ##### #",
    "#       #",
    "#########",
]

CORRIDOR_LAYOUT = [
    "############",
    "#          #",
    "############",
]


def open_room(width, height):
    """Walled rectangle with a fully open interior"""
    cells = [[1] * width for _ in range(height)]
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            cells[y][x] = 0
    return GridWorld(cells)


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ghost AI diagnostics off so test output stays readable."""

    monkeypatch.setattr(config, "ENABLE_GHOST_AI_LOGGING", False)
    monkeypatch.setattr(config, "ENABLE_PATHFINDING_LOGGING", False)
    yield


@pytest.fixture()
def no_spawn_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    """Let ghosts engage on the first tick."""

    monkeypatch.setattr(config, "FIRST_SPAWN_DELAY", 0.0)
    monkeypatch.setattr(config, "SPAWN_DELAY_STEP", 0.0)
    yield


@pytest.fixture()
def house_grid() -> GridWorld:
    grid, _, _ = parse_layout(HOUSE_LAYOUT)
    return grid


@pytest.fixture()
def corridor_grid() -> GridWorld:
    grid, _, _ = parse_layout(CORRIDOR_LAYOUT)
    return grid


@pytest.fixture()
def room_grid() -> GridWorld:
    return open_room(15, 15)


@pytest.fixture()
def house_pathfinder(house_grid: GridWorld) -> GhostPathFinder:
    return GhostPathFinder(house_grid)


@pytest.fixture()
def house_patrol(house_pathfinder: GhostPathFinder) -> PatrolLoopGenerator:
    return PatrolLoopGenerator(house_pathfinder)
