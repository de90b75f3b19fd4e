from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple, Union

from .board import CENTER_NODE, PERIMETER_SIZE, START_NODE

GOAL = "goal"
MIN_STEPS = -1
MAX_STEPS = 5


class Track(Enum):
    OUTER = "outer"
    DIAGONAL_A = "diagonal_a"  # entered from the first corner (n5)
    DIAGONAL_B = "diagonal_b"  # entered from the far corner (n10)


TRACK_WAYPOINTS: Dict[Track, Tuple[str, ...]] = {
    Track.OUTER: tuple(f"n{i}" for i in range(PERIMETER_SIZE)),
    Track.DIAGONAL_A: ("n5", "n25", "n26", CENTER_NODE, "n27", "n28"),
    Track.DIAGONAL_B: ("n10", "n23", "n22", CENTER_NODE, "n21", "n20"),
}


@dataclass(frozen=True)
class TrackPosition:
    track: Track
    index: int

    @property
    def node_id(self) -> str:
        return TRACK_WAYPOINTS[self.track][self.index]


Step = Union[TrackPosition, str]

# Where a track leads after its last waypoint. Diagonal A runs into the third
# corner (n15) and rejoins the outer loop; the other two end on the start
# corner, which completes the circuit.
TRACK_EXITS: Dict[Track, Step] = {
    Track.OUTER: GOAL,
    Track.DIAGONAL_A: TrackPosition(Track.OUTER, 15),
    Track.DIAGONAL_B: GOAL,
}

# Where backing up from the first waypoint of a track lands.
TRACK_ENTRANCES: Dict[Track, TrackPosition] = {
    Track.OUTER: TrackPosition(Track.OUTER, PERIMETER_SIZE - 1),
    Track.DIAGONAL_A: TrackPosition(Track.OUTER, 4),
    Track.DIAGONAL_B: TrackPosition(Track.OUTER, 9),
}

HOME_ENTRY = TrackPosition(Track.OUTER, 0)
DEFAULT_CENTER_EXIT = Track.DIAGONAL_B


def _build_stop_table() -> Dict[str, TrackPosition]:
    table: Dict[str, TrackPosition] = {}
    for index, node_id in enumerate(TRACK_WAYPOINTS[Track.OUTER]):
        table[node_id] = TrackPosition(Track.OUTER, index)
    # Diagonals are written after the loop so that stopping on n5 or n10
    # switches onto the shortcut.
    for track in (Track.DIAGONAL_A, Track.DIAGONAL_B):
        for index, node_id in enumerate(TRACK_WAYPOINTS[track]):
            if node_id != CENTER_NODE:
                table[node_id] = TrackPosition(track, index)
    return table


_STOPS = _build_stop_table()


def locate(node_id: str, *, center_exit: Track = DEFAULT_CENTER_EXIT) -> Optional[TrackPosition]:
    """Track position of a piece stopped on ``node_id``, or ``None`` if unknown."""
    if node_id == CENTER_NODE:
        if center_exit is Track.OUTER:
            raise ValueError("center_exit must be one of the diagonal tracks.")
        return TrackPosition(center_exit, TRACK_WAYPOINTS[center_exit].index(CENTER_NODE))
    return _STOPS.get(node_id)


def advance(position: TrackPosition) -> Step:
    """One step forward. Returns the next position or ``GOAL``."""
    next_index = position.index + 1
    if next_index < len(TRACK_WAYPOINTS[position.track]):
        return TrackPosition(position.track, next_index)
    return TRACK_EXITS[position.track]


def retreat(position: TrackPosition) -> TrackPosition:
    """One step backward along the current track."""
    if position.index > 0:
        return TrackPosition(position.track, position.index - 1)
    return TRACK_ENTRANCES[position.track]


@dataclass(frozen=True)
class PathResult:
    path: Tuple[str, ...]
    reaches_goal: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.path

    @property
    def nodes(self) -> Tuple[str, ...]:
        """Visited node ids, without the goal sentinel."""
        return tuple(step for step in self.path if step != GOAL)

    @property
    def destination(self) -> Optional[str]:
        """Final node id; ``None`` for an empty or goal path."""
        if self.reaches_goal or not self.path:
            return None
        return self.path[-1]


def _check_steps(steps: int) -> None:
    if not isinstance(steps, int) or isinstance(steps, bool):
        raise ValueError(f"Step count must be an integer, got {steps!r}.")
    if steps < MIN_STEPS or steps > MAX_STEPS:
        raise ValueError(f"Step count {steps} outside [{MIN_STEPS}, {MAX_STEPS}].")


def iter_path(
    position: Optional[str],
    steps: int,
    *,
    center_exit: Track = DEFAULT_CENTER_EXIT,
) -> Iterator[str]:
    """Yield the node ids a piece passes through, ending with ``GOAL`` on a finish.

    ``position`` is ``None`` for a piece still at home. Unknown positions and
    backward moves from home yield nothing.
    """
    _check_steps(steps)
    if steps == 0:
        return

    if position is None:
        if steps < 0:
            return
        current: Optional[TrackPosition] = HOME_ENTRY
    else:
        current = locate(position, center_exit=center_exit)
        if current is None:
            return

    if steps < 0:
        yield retreat(current).node_id
        return

    for _ in range(steps):
        step = advance(current)
        if step == GOAL:
            yield GOAL
            return
        current = step
        yield current.node_id


def resolve_path(
    position: Optional[str],
    steps: int,
    *,
    center_exit: Track = DEFAULT_CENTER_EXIT,
) -> PathResult:
    path = tuple(iter_path(position, steps, center_exit=center_exit))
    return PathResult(path=path, reaches_goal=bool(path) and path[-1] == GOAL)


def is_junction(node_id: str) -> bool:
    """Corners and the center, where track selection branches."""
    return node_id in (START_NODE, "n5", "n10", "n15", CENTER_NODE)
