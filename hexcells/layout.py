"""Screen geometry of the hexagonal field: tiles, their colours and hit testing."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from hexcells.game import Cell, Field, Position

Color = Tuple[int, int, int]
Point = Tuple[float, float]

WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
BLUE: Color = (0, 0, 255)
GREEN: Color = (0, 255, 0)
CYAN: Color = (0, 255, 255)
EARTH: Color = (87, 65, 37)

_OWNER_COLORS = {0: EARTH, 1: RED, 2: BLUE, 3: GREEN}

DEFAULT_SIDE_LEN = 45
DEFAULT_OUTLINE_THICKNESS = 1
DEFAULT_ORIGIN: Point = (10.0, 10.0)

_SQRT3 = math.sqrt(3)


@dataclass
class Rect:
    """An integer rectangle given by its top-left corner and size."""

    left: int
    top: int
    width: int
    height: int

    def contains(self, x: float, y: float) -> bool:
        """True when the point lies inside; the right and bottom edges are excluded."""
        x_min, x_max = sorted((self.left, self.left + self.width))
        y_min, y_max = sorted((self.top, self.top + self.height))
        return x_min <= x < x_max and y_min <= y < y_max


class HexTile:
    """One drawn hexagon: where it sits, what cell it shows and its colour."""

    def __init__(
        self,
        cell: Optional[Cell] = None,
        position: Point = (0.0, 0.0),
        side_len: int = DEFAULT_SIDE_LEN,
        outline_thickness: int = DEFAULT_OUTLINE_THICKNESS,
    ) -> None:
        self._cell = copy.copy(cell) if cell is not None else Cell()
        self._rect = Rect(int(position[0]), int(position[1]), 2 * side_len, 2 * side_len)
        self.outline_thickness = outline_thickness
        self._selected = False
        self._color = EARTH
        self._update_info()

    @property
    def side_len(self) -> int:
        return self._rect.width // 2

    @property
    def cell(self) -> Cell:
        return copy.copy(self._cell)

    @property
    def color(self) -> Color:
        """The owner colour, shown whenever the tile is not selected."""
        return self._color

    def bounds(self) -> Rect:
        return Rect(self._rect.left, self._rect.top, self._rect.width, self._rect.height)

    def center(self) -> Point:
        rect = self._rect
        return (rect.left + rect.width / 2, rect.top + rect.height / 2)

    def set_position(self, point: Point) -> None:
        """Move the tile's top-left corner to ``point``."""
        self._rect.left = int(point[0])
        self._rect.top = int(point[1])

    def copy_cell(self, cell: Cell) -> None:
        """Show a copy of ``cell`` and refresh colour and label."""
        self._cell = copy.copy(cell)
        self._update_info()

    def _update_info(self) -> None:
        self._color = _OWNER_COLORS.get(self._cell.owner, CYAN)

    def select(self) -> None:
        self._selected = True

    def deselect(self) -> None:
        self._selected = False

    def fill_color(self) -> Color:
        """White while selected, the owner colour otherwise."""
        return WHITE if self._selected else self._color

    def label(self) -> str:
        return f" {self._cell.size}"


class FieldLayout:
    """Tiles of a whole field, laid out in offset rows starting at ``origin``."""

    def __init__(
        self,
        field: Field,
        origin: Point = DEFAULT_ORIGIN,
        side_len: int = DEFAULT_SIDE_LEN,
        outline_thickness: int = DEFAULT_OUTLINE_THICKNESS,
    ) -> None:
        self._width = field.width()
        self._height = field.height()
        step_x = side_len * _SQRT3 + 2 * outline_thickness
        step_y = (side_len + outline_thickness) * 1.5
        odd_shift = side_len * _SQRT3 / 2 + outline_thickness
        origin_x, origin_y = origin

        self._tiles: List[List[HexTile]] = []
        for y in range(self._height):
            shift = odd_shift if y % 2 else 0.0
            row = [
                HexTile(
                    field[Position(x, y)],
                    (origin_x + shift + step_x * x, origin_y + step_y * y),
                    side_len,
                    outline_thickness,
                )
                for x in range(self._width)
            ]
            self._tiles.append(row)

    def _check(self, pos: Position) -> None:
        if not (0 <= pos.x < self._width and 0 <= pos.y < self._height):
            raise IndexError(f"position {pos} is outside the layout")

    def __getitem__(self, pos: Position) -> HexTile:
        self._check(pos)
        return self._tiles[pos.y][pos.x]

    def select(self, pos: Position) -> None:
        self[pos].select()

    def deselect(self, pos: Position) -> None:
        self[pos].deselect()

    def hex_at(self, point: Point) -> Optional[Position]:
        """The hexagon whose incircle holds ``point``, or None when there is none."""
        px, py = point
        for y, row in enumerate(self._tiles):
            for x, tile in enumerate(row):
                if not tile.bounds().contains(px, py):
                    continue
                cx, cy = tile.center()
                if math.hypot(px - cx, py - cy) <= tile.side_len * _SQRT3 / 2:
                    return Position(x, y)
        return None

    def update(self, field: Field) -> None:
        """Refresh every tile from ``field``, which must have the same size."""
        if field.width() != self._width or field.height() != self._height:
            raise ValueError("field size does not match the layout")
        for y, row in enumerate(self._tiles):
            for x, tile in enumerate(row):
                tile.copy_cell(field[Position(x, y)])