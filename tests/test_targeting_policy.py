"""Tests for per-type chase targets and fallback policies."""

import pytest

from ghost_types import Direction, Ghost, GhostType, PlayerSnapshot
from grid_world import GridWorld
from targeting_policy import (BlueBehavior, RedBehavior, YellowBehavior,
                              behavior_for, chase_target)


def _ghost(ghost_type, position=(1, 1)):
    return Ghost(index=0, ghost_type=ghost_type, position=position, spawn_position=position)


class TestDirectPursuit:
    @pytest.mark.parametrize("ghost_type", [GhostType.RED, GhostType.BLUE], ids=["red", "blue"])
    def test_targets_player_tile(self, room_grid: GridWorld, ghost_type: GhostType) -> None:
        player = PlayerSnapshot(6, 4, Direction.UP)

        assert chase_target(_ghost(ghost_type), player, (2, 2), room_grid) == (6, 4)


class TestYellowAmbush:
    """Yellow mirrors Red through a point two tiles ahead of the player."""

    def test_reflects_red_through_anchor(self, room_grid: GridWorld) -> None:
        player = PlayerSnapshot(5, 5, Direction.RIGHT)

        target = chase_target(_ghost(GhostType.YELLOW), player, (3, 5), room_grid)

        assert target == (11, 5)

    def test_clamped_wall_target_falls_back_to_player(self, room_grid: GridWorld) -> None:
        player = PlayerSnapshot(10, 5, Direction.RIGHT)

        # Reflection lands at (21, 5), clamps onto the border wall at (14, 5)
        assert chase_target(_ghost(GhostType.YELLOW), player, (3, 5), room_grid) == (10, 5)

    def test_clamped_open_target_is_kept(self) -> None:
        grid = GridWorld([[0] * 10 for _ in range(10)])
        player = PlayerSnapshot(7, 2, Direction.RIGHT)

        assert chase_target(_ghost(GhostType.YELLOW), player, (1, 2), grid) == (9, 2)

    def test_without_red_targets_player(self, room_grid: GridWorld) -> None:
        player = PlayerSnapshot(5, 5, Direction.DOWN)

        assert chase_target(_ghost(GhostType.YELLOW), player, None, room_grid) == (5, 5)

    def test_stationary_facing_none_uses_player_as_anchor(self, room_grid: GridWorld) -> None:
        player = PlayerSnapshot(6, 6, Direction.NONE)

        assert chase_target(_ghost(GhostType.YELLOW), player, (4, 6), room_grid) == (8, 6)


class TestBehaviorRecords:
    @pytest.mark.parametrize(
        "ghost_type, behavior_class, uses_return, keeps_chasing",
        [
            (GhostType.RED, RedBehavior, False, True),
            (GhostType.YELLOW, YellowBehavior, True, False),
            (GhostType.BLUE, BlueBehavior, True, False),
        ],
        ids=["red", "yellow", "blue"],
    )
    def test_policy_flags(self, ghost_type, behavior_class, uses_return, keeps_chasing) -> None:
        behavior = behavior_for(ghost_type)

        assert isinstance(behavior, behavior_class)
        assert behavior.uses_return is uses_return
        assert behavior.keeps_chasing_when_unreachable is keeps_chasing
