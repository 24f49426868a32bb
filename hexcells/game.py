"""Game primitives: positions, phases, players, cells and the hexagonal field."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import chain
from typing import ClassVar, Iterator, List

_U16_MASK = 0xFFFF
_DEFAULT_CAPACITY = 8


@dataclass(frozen=True)
class Position:
    """A field coordinate: ``x`` is the column, ``y`` is the row."""

    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return f"{{{self.x},{self.y}}}"


class Phase(Enum):
    """Phase of play: ATTACK -> FEED -> WAIT, plus the two final outcomes."""

    ATTACK = 0
    FEED = 1
    WAIT = 2
    LOSE = 3
    WIN = 4

    def __str__(self) -> str:
        return f"<{self.name.lower()}>"


@dataclass
class PlayerData:
    """A player's nickname and the id the server assigned (zero means none)."""

    nickname: str = "Player"
    id: int = 0

    def __str__(self) -> str:
        return f"Player{self.id}({self.nickname})"


@dataclass
class Cell:
    """One hexagon of the field: current size, owning player and capacity."""

    DEFAULT_CAPACITY: ClassVar[int] = _DEFAULT_CAPACITY

    size: int = 0
    owner: int = 0
    capacity: int = _DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        if self.size > self.capacity:
            self.size = self.capacity

    def empty(self) -> bool:
        """True when the cell holds nothing."""
        return self.size == 0

    def belongs_to(self, owner: int) -> bool:
        return self.owner == owner

    def discard(self) -> None:
        """Empty the cell; nobody owns an empty cell."""
        self.size = 0
        self.owner = 0

    def init(self, owner: int) -> None:
        """Make the cell a fresh nest of ``owner``."""
        self.size = 2
        self.owner = owner

    def __str__(self) -> str:
        return f"[{self.size}/{self.capacity}:{self.owner}]"


class Field:
    """A rectangular grid of cells laid out as offset hexagon rows."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self._rows: List[List[Cell]] = self._blank(height, width)

    @staticmethod
    def _blank(height: int, width: int) -> List[List[Cell]]:
        return [[Cell() for _ in range(width)] for _ in range(height)]

    def _check(self, pos: Position) -> None:
        if not self.contains(pos):
            raise IndexError(f"position {pos} is outside the field")

    def _cells(self) -> Iterator[Cell]:
        return chain.from_iterable(self._rows)

    def _positions(self) -> Iterator[Position]:
        for y, row in enumerate(self._rows):
            for x in range(len(row)):
                yield Position(x, y)

    def __getitem__(self, pos: Position) -> Cell:
        self._check(pos)
        return self._rows[pos.y][pos.x]

    def __setitem__(self, pos: Position, cell: Cell) -> None:
        self._check(pos)
        self._rows[pos.y][pos.x] = cell

    def height(self) -> int:
        return len(self._rows)

    def width(self) -> int:
        return len(self._rows[0]) if self._rows else 0

    def count(self, owner: int) -> int:
        """Total size of all cells owned by ``owner``."""
        return sum(cell.size for cell in self._cells() if cell.belongs_to(owner))

    def attack(self, who: Position, whom: Position) -> None:
        """Move all but one unit from ``who`` onto ``whom``, unconditionally."""
        attacker = self[who]
        mass = (attacker.size - 1) & _U16_MASK
        attacker.size = 1

        target = self[whom]
        if target.owner == 0:
            target.size = mass
            target.owner = attacker.owner
            return
        remaining = target.size - mass
        if remaining == 0:
            target.discard()
        elif remaining > 0:
            target.size = remaining
        else:
            target.size = (-remaining) & _U16_MASK
            target.owner = attacker.owner

    def may_attack(self, owner: int, who: Position, whom: Position) -> bool:
        if not self.contains(who) or not self.contains(whom):
            return False
        attacker, target = self[who], self[whom]
        return (
            self.reachable(who, whom)
            and attacker.belongs_to(owner)
            and not target.belongs_to(owner)
            and attacker.size > 1
        )

    def feed(self, whom: Position) -> None:
        """Grow the cell at ``whom`` by one, unconditionally."""
        cell = self[whom]
        cell.size = (cell.size + 1) & _U16_MASK

    def may_feed(self, owner: int, whom: Position) -> bool:
        if not self.contains(whom):
            return False
        cell = self[whom]
        return cell.belongs_to(owner) and cell.size < cell.capacity

    def contains(self, pos: Position) -> bool:
        """True when ``pos`` lies within the field bounds."""
        return 0 <= pos.y < self.height() and 0 <= pos.x < self.width()

    def belongs_to(self, owner: int) -> bool:
        """True when every cell of the field is owned by ``owner``."""
        return all(cell.belongs_to(owner) for cell in self._cells())

    def reachable(self, a: Position, b: Position) -> bool:
        """True when ``b`` can be reached from ``a`` in one step."""
        if not self.contains(a) or not self.contains(b) or a == b:
            return False
        if abs(b.x - a.x) > 1:
            return False
        if a.y == b.y or a.x == b.x:
            return True
        return a.x == b.x + (1 if a.y % 2 == 0 else -1)

    def resize(self, height: int, width: int) -> None:
        """Replace the field with a blank one of the given size."""
        self._rows = self._blank(height, width)

    def discard(self, owner: int) -> List[Position]:
        """Empty every cell of ``owner`` and return their positions."""
        discarded = []
        for pos in self._positions():
            cell = self[pos]
            if cell.belongs_to(owner):
                cell.discard()
                discarded.append(pos)
        return discarded

    def nest(self, owner: int) -> Position:
        """Start ``owner`` in one empty cell, corners first."""
        width, height = self.width(), self.height()
        corners = (
            Position(0, 0),
            Position(0, width - 1),
            Position(height - 1, 0),
            Position(height - 1, width - 1),
        )
        for pos in chain(corners, self._positions()):
            cell = self[pos]
            if cell.empty():
                cell.init(owner)
                return pos
        raise ValueError("no free cell to nest in")

    def __str__(self) -> str:
        lines = []
        for index, row in enumerate(self._rows):
            indent = "    " if index % 2 else ""
            lines.append(indent + "".join(f"{cell} " for cell in row) + "\n")
        return "".join(lines)