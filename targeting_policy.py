"""
Per-ghost-type behaviour: chase target selection and fallback policy.

Each ghost type maps to one behaviour record; the state machine dispatches
through these instead of branching on the ghost type.
"""

import config
from ghost_types import GhostType


class GhostBehavior:
    """Direct pursuit: the chase target is the player's own tile."""

    ghost_type = None
    # Whether the ghost walks back to its patrol loop in the Return state
    uses_return = True
    # Whether an unreachable chase target keeps the ghost chasing on its old path
    keeps_chasing_when_unreachable = False

    def chase_target(self, ghost, player, red_position, grid):
        return player.tile


class RedBehavior(GhostBehavior):
    ghost_type = GhostType.RED
    uses_return = False
    keeps_chasing_when_unreachable = True


class BlueBehavior(GhostBehavior):
    ghost_type = GhostType.BLUE


class YellowBehavior(GhostBehavior):
    """Ambusher: flanks the player by mirroring Red through a point ahead of the player."""

    ghost_type = GhostType.YELLOW

    def chase_target(self, ghost, player, red_position, grid):
        player_tile = player.tile
        if red_position is None:
            return player_tile

        lookahead = getattr(config, 'YELLOW_LOOKAHEAD', 2)
        dx, dy = player.facing.delta
        anchor = (player_tile[0] + dx * lookahead, player_tile[1] + dy * lookahead)

        # Reflect the anchor through Red: anchor + (anchor - red)
        target = (2 * anchor[0] - red_position[0], 2 * anchor[1] - red_position[1])
        target = grid.clamp(target)

        if not grid.walkable(target):
            return player_tile
        return target


BEHAVIORS = {
    GhostType.RED: RedBehavior(),
    GhostType.YELLOW: YellowBehavior(),
    GhostType.BLUE: BlueBehavior(),
}


def behavior_for(ghost_type):
    return BEHAVIORS[ghost_type]


def chase_target(ghost, player, red_position, grid):
    """Chase target for ghost given the player snapshot and Red's start-of-tick tile"""
    return behavior_for(ghost.ghost_type).chase_target(ghost, player, red_position, grid)
