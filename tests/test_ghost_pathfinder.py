"""Tests for ghost BFS pathfinding and the one-way door rule."""

from collections import deque

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from ghost_pathfinder import GhostPathFinder
from grid_world import GridWorld
from path_validator import PathValidator


@st.composite
def _grids_with_endpoints(draw: st.DrawFn):
    width = draw(st.integers(min_value=2, max_value=7))
    height = draw(st.integers(min_value=2, max_value=7))
    cells = draw(
        st.lists(
            st.lists(st.sampled_from([0, 0, 1]), min_size=width, max_size=width),
            min_size=height,
            max_size=height,
        )
    )
    open_tiles = [(x, y) for y in range(height) for x in range(width) if cells[y][x] == 0]
    assume(open_tiles)
    start = draw(st.sampled_from(open_tiles))
    goal = draw(st.sampled_from(open_tiles))
    return GridWorld(cells), start, goal


def _reference_distance(grid, start, goal):
    """Plain flood fill over walkable tiles, no door handling"""
    distances = {start: 0}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nxt in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
            if nxt not in distances and grid.walkable(nxt):
                distances[nxt] = distances[(x, y)] + 1
                queue.append(nxt)
    return distances.get(goal)


class TestShortestPath:
    """BFS results on door-free grids match an independent flood fill."""

    @settings(max_examples=150)
    @given(case=_grids_with_endpoints())
    def test_length_matches_reference(self, case) -> None:
        grid, start, goal = case
        pathfinder = GhostPathFinder(grid)
        expected = _reference_distance(grid, start, goal)

        path = pathfinder.shortest_path(start, goal)

        if start == goal or expected is None:
            assert path == []
        else:
            assert len(path) == expected
            assert path[-1] == goal
            assert start not in path
            assert PathValidator(pathfinder).validate_path_strict(path, start=start)

    @settings(max_examples=150)
    @given(case=_grids_with_endpoints(), max_range=st.integers(min_value=0, max_value=12))
    def test_path_distance_respects_range(self, case, max_range: int) -> None:
        grid, start, goal = case
        expected = _reference_distance(grid, start, goal)

        distance = GhostPathFinder(grid).path_distance(start, goal, max_range)

        if expected is None or expected > max_range:
            assert distance is None
        else:
            assert distance == expected

    def test_start_equals_goal(self, room_grid: GridWorld) -> None:
        pathfinder = GhostPathFinder(room_grid)

        assert pathfinder.shortest_path((3, 3), (3, 3)) == []
        assert pathfinder.path_distance((3, 3), (3, 3), 8) == 0

    def test_wall_endpoints(self, room_grid: GridWorld) -> None:
        pathfinder = GhostPathFinder(room_grid)

        assert pathfinder.shortest_path((0, 0), (3, 3)) == []
        assert pathfinder.shortest_path((3, 3), (0, 0)) == []
        assert pathfinder.path_distance((3, 3), (0, 3), 20) is None


class TestGhostDoor:
    """Doors may only be entered from inside the ghost house."""

    def test_path_out_of_house_goes_through_door(self, house_pathfinder: GhostPathFinder) -> None:
        assert house_pathfinder.shortest_path((4, 3), (4, 1)) == [(4, 2), (4, 1)]

    def test_no_path_into_house_from_outside(self, house_pathfinder: GhostPathFinder) -> None:
        assert house_pathfinder.shortest_path((4, 1), (4, 3)) == []
        assert house_pathfinder.shortest_path((4, 1), (4, 2)) == []
        assert house_pathfinder.path_distance((4, 1), (4, 4), 20) is None

    def test_can_enter(self, house_pathfinder: GhostPathFinder) -> None:
        assert house_pathfinder.can_enter((4, 3), (4, 2))
        assert not house_pathfinder.can_enter((4, 1), (4, 2))
        assert house_pathfinder.can_enter((4, 2), (4, 1))
        assert not house_pathfinder.can_enter((1, 1), (0, 1))


class TestNearestTarget:
    def test_picks_closest_target(self, room_grid: GridWorld) -> None:
        pathfinder = GhostPathFinder(room_grid)

        result = pathfinder.find_nearest_target((1, 1), [(10, 10), (1, 4), (5, 1)])

        assert result['target'] == (1, 4)
        assert result['distance'] == 3
        assert result['path'] == [(1, 2), (1, 3), (1, 4)]

    def test_start_on_target(self, room_grid: GridWorld) -> None:
        result = GhostPathFinder(room_grid).find_nearest_target((2, 2), [(2, 2), (3, 2)])

        assert result == {'target': (2, 2), 'path': [], 'distance': 0}

    def test_no_reachable_target(self, house_pathfinder: GhostPathFinder) -> None:
        assert house_pathfinder.find_nearest_target((1, 1), [(4, 4)]) is None
        assert house_pathfinder.find_nearest_target((1, 1), []) is None

    def test_max_distance_limits_search(self, room_grid: GridWorld) -> None:
        pathfinder = GhostPathFinder(room_grid)

        assert pathfinder.find_nearest_target((1, 1), [(1, 6)], max_distance=4) is None
        assert pathfinder.find_nearest_target((1, 1), [(1, 6)], max_distance=5)['distance'] == 5

    def test_statistics_track_searches(self, room_grid: GridWorld) -> None:
        pathfinder = GhostPathFinder(room_grid)
        pathfinder.shortest_path((1, 1), (3, 1))
        pathfinder.shortest_path((1, 1), (0, 0))

        stats = pathfinder.get_statistics()
        assert stats['searches'] == 1
        assert stats['nodes_explored'] > 0

        pathfinder.reset_statistics()
        assert pathfinder.get_statistics()['searches'] == 0
