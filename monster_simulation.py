#!/usr/bin/env python3
"""
Headless ghost AI scenario runner.

Builds a small test map, walks a scripted player around it (with an optional
power window) and drives MonsterSystem frame by frame, printing an ASCII view
and a summary of hits, eaten ghosts and state changes.
"""

import time

import config
from ghost_types import Direction, GhostState, GhostType, PlayerSnapshot, step
from grid_world import DOT, PATH, POWER_PELLET, WALL, GridWorld
from monster_system import MonsterSystem

ANSI_RESET = "\x1b[0m"
ANSI_COLORS = {
    '#': "\x1b[90m",
    'R': "\x1b[31m", 'r': "\x1b[31m",
    'Y': "\x1b[33m", 'y': "\x1b[33m",
    'B': "\x1b[34m", 'b': "\x1b[34m",
    'P': "\x1b[32m",
    '@': "\x1b[35m",
}
GHOST_CHARS = {
    GhostType.RED: 'R',
    GhostType.YELLOW: 'Y',
    GhostType.BLUE: 'B',
}
PLAYER_CELLS = (PATH, DOT, POWER_PELLET)


def make_test_map(width=21, height=15):
    """Walled box with two vertical walls and a horizontal wall with three gaps"""
    cells = [[WALL] * width for _ in range(height)]
    for y in range(1, height - 1):
        for x in range(1, width - 1):
            cells[y][x] = PATH

    for y in range(2, height - 2):
        cells[y][width // 3] = WALL
        cells[y][2 * width // 3] = WALL

    for x in range(2, width - 2):
        cells[height // 2][x] = WALL
    for x in (width // 6, width // 2, 5 * width // 6):
        cells[height // 2][x] = PATH

    return GridWorld(cells)


def player_walkable(grid, tile):
    return grid.in_bounds(tile) and grid.cell_at(tile) in PLAYER_CELLS


def advance_player_walker(grid, tile, facing):
    """Scripted player: straight, else turn right, else left, else U-turn"""
    for direction in (facing, facing.turn_right(), facing.turn_left(), facing.reverse()):
        nxt = step(tile, direction)
        if player_walkable(grid, nxt):
            return nxt, direction
    return tile, facing


def pick_safe_start(grid, spawns, min_distance=6):
    """Player start maximising total Manhattan distance to the spawns"""
    best = None
    best_score = -1
    for y in range(1, grid.height - 1):
        for x in range(1, grid.width - 1):
            if not player_walkable(grid, (x, y)):
                continue
            distances = [abs(x - sx) + abs(y - sy) for sx, sy in spawns]
            if distances and min(distances) < min_distance:
                continue
            score = sum(distances)
            if score > best_score:
                best, best_score = (x, y), score
    if best is None:
        return (grid.width // 2, grid.height // 2)
    return best


def render_ascii(grid, player, infos, color=False):
    """ASCII frame: '#' walls, R/Y/B ghosts (lowercase when stunned), P player ('@' powered)"""
    canvas = [['#' if grid.cell_at((x, y)) == WALL else ' ' for x in range(grid.width)]
              for y in range(grid.height)]

    for info in infos:
        x, y = info.tile
        if not grid.in_bounds(info.tile):
            continue
        char = GHOST_CHARS[info.ghost_type]
        if info.state == GhostState.STUNNED:
            char = char.lower()
        canvas[y][x] = char

    if player is not None and grid.in_bounds(player.tile):
        canvas[player.grid_y][player.grid_x] = '@' if player.is_powered else 'P'

    lines = []
    for row in canvas:
        if color:
            lines.append(''.join(f"{ANSI_COLORS.get(c, ANSI_RESET)}{c}{ANSI_RESET}" for c in row))
        else:
            lines.append(''.join(row))
    return '\n'.join(lines)


def run_scenario(width=21, height=15, spawns=None, frames=240, dt=0.16,
                 power_window=(120, 160), perception_range=None,
                 render=False, frame_delay=0.0):
    """
    Drive MonsterSystem with a scripted player.

    Args:
        spawns: ghost spawn tiles (default: bottom-left, bottom-middle, bottom-right)
        power_window: (first, last) frame range in which the player is powered, or None
        render: print an ASCII frame and per-ghost status each frame

    Returns:
        dict summary with hit/eaten counts, per-ghost state history and chase entries
    """
    grid = make_test_map(width, height)
    if spawns is None:
        spawns = [(1, height - 2), (width // 2, height - 2), (width - 2, height - 2)]
    if perception_range is None:
        perception_range = config.DEFAULT_PERCEPTION_RANGE

    monsters = MonsterSystem(grid, spawns, perception_range=perception_range)
    player_tile = pick_safe_start(grid, spawns, min_distance=6)
    player_facing = Direction.RIGHT

    summary = {
        'frames': 0,
        'hits': 0,
        'invalid_power_hits': 0,
        'stunned_events': 0,
        'wall_violations': 0,
        'state_history': [[] for _ in spawns],
        'player_history': [],
    }

    for frame in range(frames):
        player_tile, player_facing = advance_player_walker(grid, player_tile, player_facing)
        powered = power_window is not None and power_window[0] <= frame < power_window[1]
        snapshot = PlayerSnapshot(player_tile[0], player_tile[1], player_facing, powered)

        monsters.set_player_snapshot(snapshot)
        monsters.advance(dt)

        infos = monsters.render_info()
        events = monsters.poll_events()
        summary['frames'] += 1
        summary['player_history'].append(player_tile)

        for i, info in enumerate(infos):
            history = summary['state_history'][i]
            if info.state == GhostState.STUNNED and (not history or history[-1] != GhostState.STUNNED):
                summary['stunned_events'] += 1
            history.append(info.state)
            if not grid.walkable(info.tile):
                summary['wall_violations'] += 1
                print(f"  [ASSERT] ghost {i} stepped into a wall at {info.tile}!")

        if events.player_hit:
            if powered:
                summary['invalid_power_hits'] += 1
            else:
                summary['hits'] += 1

        if render:
            print("\x1b[2J\x1b[H", end='')
            print(render_ascii(grid, snapshot, infos, color=True))
            print(f"F={frame}  P{player_tile} powered={'Y' if powered else 'N'}")
            for i, info in enumerate(infos):
                print(f"  G{i} @{info.tile} state={info.state.name}")
            if events.player_hit:
                print("  [HIT] playerHit=true")
            if frame_delay:
                time.sleep(frame_delay)

    stats = monsters.get_statistics()
    summary['eaten'] = stats['eaten'] + stats['eaten_from_behind']
    summary['chase_entries'] = [entry for entry in monsters.transition_log
                                if entry['to'] == GhostState.CHASE]
    return summary


def main():
    print("👻 GHOST AI SCENARIO")
    print("=" * 40)
    summary = run_scenario(render=True, frame_delay=0.08)

    print("\n=== TEST SUMMARY ===")
    print(f" frames run = {summary['frames']}")
    print(f" hits (non-power) = {summary['hits']}")
    print(f" invalid hits during POWER = {summary['invalid_power_hits']}")
    print(f" stunned events = {summary['stunned_events']}")
    print(f" ghosts eaten = {summary['eaten']}")
    print(f" wall violations = {summary['wall_violations']}")
    print(f" chase entries = {len(summary['chase_entries'])}")


if __name__ == "__main__":
    main()
