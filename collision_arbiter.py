"""
Ghost/player contact resolution.

Both agents move independently, so overlap alone does not say who caused it.
The arbiter compares this tick's tiles with the previous tick's tiles to
decide whether the player ate the ghost or the ghost hit the player. It is
the only place where contact is decided; call it once per ghost per tick.
"""

import config

EATEN = 'eaten'
EATEN_FROM_BEHIND = 'eaten_from_behind'
HIT = 'hit'


class CollisionArbiter:
    def __init__(self, respawner):
        # respawner(ghost) puts an eaten ghost back on its spawn tile
        self.respawner = respawner

        self.stats = {
            'hits': 0,
            'eaten': 0,
            'eaten_from_behind': 0,
        }

    def arbitrate(self, ghost, player, previous_player_tile, events):
        """
        Resolve contact between ghost and player after the ghost's movement step.

        Args:
            ghost: Ghost record (position/previous_position already updated)
            player: current PlayerSnapshot
            previous_player_tile: player's tile on the previous tick
            events: MonsterEvents collecting this tick's signals

        Returns:
            'eaten', 'eaten_from_behind', 'hit' or None when there is no overlap
        """
        player_tile = player.tile
        if ghost.position != player_tile:
            return None

        if player.is_powered:
            self._respawn(ghost, EATEN)
            return EATEN

        player_delta = (player_tile[0] - previous_player_tile[0], player_tile[1] - previous_player_tile[1])
        player_moved = player_delta != (0, 0)
        ghost_moved = ghost.previous_position != ghost.position

        # Player stepped onto the tile the ghost occupied last tick
        player_moved_into = player_moved and player_tile == ghost.previous_position
        # Ghost stepped onto the tile the player occupied last tick
        ghost_moved_into = ghost_moved and ghost.position == previous_player_tile
        from_behind = player_delta == ghost.facing.delta

        if player_moved_into and not ghost_moved_into and from_behind:
            self._respawn(ghost, EATEN_FROM_BEHIND)
            return EATEN_FROM_BEHIND

        events.player_hit = True
        ghost.hit_freeze_ticks = getattr(config, 'HIT_FREEZE_TICKS', 1)
        self.stats['hits'] += 1
        if getattr(config, 'ENABLE_GHOST_AI_LOGGING', False):
            print(f"💥 {ghost.name} hit the player at {player_tile}")
        return HIT

    def _respawn(self, ghost, outcome):
        self.stats[outcome] += 1
        if getattr(config, 'ENABLE_GHOST_AI_LOGGING', False):
            print(f"✅ {ghost.name} eaten at {ghost.position} ({outcome}), respawning at {ghost.spawn_position}")
        self.respawner(ghost)
