"""Tests for the shared ghost data model."""

from dataclasses import FrozenInstanceError

import pytest

from ghost_types import (Direction, Ghost, GhostType, MonsterEvents,
                         PlayerSnapshot, step)


class TestDirection:
    @pytest.mark.parametrize(
        "direction, right, left, reverse",
        [
            (Direction.RIGHT, Direction.DOWN, Direction.UP, Direction.LEFT),
            (Direction.DOWN, Direction.LEFT, Direction.RIGHT, Direction.UP),
            (Direction.LEFT, Direction.UP, Direction.DOWN, Direction.RIGHT),
            (Direction.UP, Direction.RIGHT, Direction.LEFT, Direction.DOWN),
            (Direction.NONE, Direction.NONE, Direction.NONE, Direction.NONE),
        ],
        ids=lambda d: d.name if isinstance(d, Direction) else str(d),
    )
    def test_turns(self, direction, right, left, reverse) -> None:
        assert direction.turn_right() == right
        assert direction.turn_left() == left
        assert direction.reverse() == reverse

    def test_from_delta(self) -> None:
        assert Direction.from_delta((0, -1)) == Direction.UP
        assert Direction.from_delta([1, 0]) == Direction.RIGHT
        assert Direction.from_delta((2, 0)) == Direction.NONE
        assert Direction.from_delta((0, 0)) == Direction.NONE

    def test_step(self) -> None:
        assert step((3, 3), Direction.UP) == (3, 2)
        assert step((3, 3), Direction.NONE) == (3, 3)


class TestRecords:
    def test_spawn_index_types(self) -> None:
        assert [GhostType.for_spawn_index(i) for i in range(5)] == [
            GhostType.RED, GhostType.YELLOW, GhostType.BLUE, GhostType.BLUE, GhostType.BLUE]

    def test_ghost_path_helpers(self) -> None:
        ghost = Ghost(index=2, ghost_type=GhostType.BLUE, position=(1, 1), spawn_position=(1, 1))

        assert ghost.previous_position == (1, 1)
        assert ghost.name == "Blue#2"
        assert not ghost.has_path()

        ghost.set_path([(2, 1), (3, 1)])
        ghost.path_index = 1
        assert ghost.has_path()

        ghost.path_index = 2
        assert not ghost.has_path()

        ghost.clear_path()
        assert ghost.active_path == [] and ghost.path_index == 0

    def test_snapshot_is_immutable(self) -> None:
        snapshot = PlayerSnapshot(4, 5)

        assert snapshot.tile == (4, 5)
        assert snapshot.facing == Direction.RIGHT
        with pytest.raises(FrozenInstanceError):
            snapshot.grid_x = 7

    def test_events_reset(self) -> None:
        events = MonsterEvents(player_hit=True)
        events.reset()

        assert events.player_hit is False
