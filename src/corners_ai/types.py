"""Core data structures for Corners.

Rule reminders:
- Board is 8x8 with coordinates (r, c) from top-left.
- Player A starts in the top-left corner and races to the bottom-right one;
  Player B starts bottom-right and races to the top-left.
- Pieces step to an orthogonal neighbour or chain jumps over any occupied cell.
  Nothing is ever captured.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


Coord = Tuple[int, int]
VALID_CORNER_DIMENSIONS = frozenset({(3, 3), (3, 4), (4, 4)})


class Player(Enum):
    """Players in the game."""

    A = "A"
    B = "B"

    def opponent(self) -> "Player":
        """Return the opposing player."""

        return Player.A if self is Player.B else Player.B


@dataclass(frozen=True)
class CornerShape:
    """Rectangle of start/goal cells; only 3x3, 3x4 and 4x4 are playable."""

    rows: int
    cols: int

    def __post_init__(self) -> None:
        if (self.rows, self.cols) not in VALID_CORNER_DIMENSIONS:
            raise ValueError(
                f"corner shape must be one of {sorted(VALID_CORNER_DIMENSIONS)}; got {self.rows}x{self.cols}"
            )

    @classmethod
    def parse(cls, raw: str) -> "CornerShape":
        """Parse text like ``3x4`` into a shape."""

        parts = raw.lower().replace("×", "x").split("x")
        if len(parts) != 2:
            raise ValueError(f"corner shape must look like ROWSxCOLS; got '{raw}'")
        try:
            rows, cols = int(parts[0]), int(parts[1])
        except ValueError as exc:
            raise ValueError(f"corner shape must look like ROWSxCOLS; got '{raw}'") from exc
        return cls(rows=rows, cols=cols)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def __str__(self) -> str:
        return f"{self.rows}x{self.cols}"


@dataclass(frozen=True)
class Piece:
    """A piece on the board; ``id`` is stable for the whole game."""

    id: str
    player: Player
    row: int
    col: int

    @property
    def position(self) -> Coord:
        return (self.row, self.col)

    def moved_to(self, to_rc: Coord) -> "Piece":
        """Return a copy of this piece standing on ``to_rc``."""

        return Piece(id=self.id, player=self.player, row=to_rc[0], col=to_rc[1])


@dataclass(frozen=True)
class Move:
    """A move of the piece on ``from_rc``; ``path`` lists every landing cell when known."""

    from_rc: Coord
    to_rc: Coord
    path: Optional[Tuple[Coord, ...]] = None


@dataclass(frozen=True)
class AIMove:
    """Best move reported by the search, scored from the mover's perspective."""

    from_rc: Coord
    to_rc: Coord
    score: float
