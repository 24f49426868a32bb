import pytest

from hexcells.game import Cell, Field, Position
from hexcells.layout import (
    BLUE,
    CYAN,
    EARTH,
    GREEN,
    RED,
    WHITE,
    FieldLayout,
    HexTile,
    Rect,
)


def test_rect_contains_edges():
    rect = Rect(0, 0, 10, 10)
    assert rect.contains(0, 0)
    assert rect.contains(9, 9)
    assert not rect.contains(10, 5)
    assert not rect.contains(5, 10)
    assert not rect.contains(-1, 5)


def test_tile_bounds_from_side_len():
    tile = HexTile(Cell(), (20.0, 30.0), side_len=45)
    assert tile.bounds() == Rect(20, 30, 90, 90)
    assert tile.side_len == 45


def test_tile_center_is_middle_of_bounds():
    tile = HexTile(Cell(), (20.0, 30.0), side_len=45)
    rect = tile.bounds()
    assert tile.center() == (rect.left + rect.width / 2, rect.top + rect.height / 2)


def test_tile_set_position_moves_bounds():
    tile = HexTile(Cell(), (0.0, 0.0), side_len=10)
    tile.set_position((7.9, 3.2))
    assert tile.bounds() == Rect(7, 3, 20, 20)


@pytest.mark.parametrize(
    "owner, color",
    [(0, EARTH), (1, RED), (2, BLUE), (3, GREEN), (4, CYAN), (9, CYAN)],
)
def test_tile_color_by_owner(owner, color):
    tile = HexTile(Cell(size=2, owner=owner))
    assert tile.fill_color() == color


def test_tile_label_shows_size():
    tile = HexTile(Cell(size=3, owner=1))
    assert tile.label() == " 3"


def test_select_and_deselect():
    tile = HexTile(Cell(size=2, owner=2))
    tile.select()
    assert tile.fill_color() == WHITE
    tile.deselect()
    assert tile.fill_color() == BLUE


def test_copy_cell_keeps_selection_and_updates_color():
    tile = HexTile(Cell(size=2, owner=1))
    tile.select()
    tile.copy_cell(Cell(size=5, owner=3))
    assert tile.fill_color() == WHITE
    assert tile.color == GREEN
    assert tile.label() == " 5"


def test_copy_cell_is_a_copy():
    cell = Cell(size=2, owner=1)
    tile = HexTile(cell)
    cell.size = 7
    assert tile.cell.size == 2


def test_layout_first_tile_at_origin():
    layout = FieldLayout(Field(3, 3), origin=(10.0, 10.0))
    assert layout[Position(0, 0)].bounds().left == 10
    assert layout[Position(0, 0)].bounds().top == 10


def test_layout_odd_rows_are_shifted():
    layout = FieldLayout(Field(3, 3))
    row0 = layout[Position(0, 0)].bounds()
    row1 = layout[Position(0, 1)].bounds()
    row2 = layout[Position(0, 2)].bounds()
    assert row1.left > row0.left
    assert row2.left == row0.left
    assert row0.top < row1.top < row2.top


def test_layout_columns_increase():
    layout = FieldLayout(Field(4, 2))
    lefts = [layout[Position(x, 0)].bounds().left for x in range(4)]
    assert lefts == sorted(lefts)
    assert len(set(lefts)) == 4


def test_hex_at_center_finds_tile():
    layout = FieldLayout(Field(4, 4))
    for y in range(4):
        for x in range(4):
            cx, cy = layout[Position(x, y)].center()
            assert layout.hex_at((cx, cy)) == Position(x, y)


def test_hex_at_outside_field():
    layout = FieldLayout(Field(2, 2), origin=(10.0, 10.0))
    assert layout.hex_at((0, 0)) is None
    assert layout.hex_at((5000, 5000)) is None


def test_hex_at_bounds_corner_outside_incircle():
    layout = FieldLayout(Field(1, 1), origin=(10.0, 10.0))
    rect = layout[Position(0, 0)].bounds()
    assert layout.hex_at((rect.left, rect.top)) is None


def test_layout_reflects_field_cells():
    field = Field(2, 2)
    field.nest(1)
    layout = FieldLayout(field)
    assert layout[Position(0, 0)].fill_color() == RED
    assert layout[Position(0, 0)].label() == " 2"


def test_update_refreshes_tiles():
    field = Field(2, 2)
    layout = FieldLayout(field)
    field[Position(1, 1)] = Cell(size=4, owner=2)
    layout.update(field)
    assert layout[Position(1, 1)].label() == " 4"
    assert layout[Position(1, 1)].fill_color() == BLUE


def test_update_rejects_other_size():
    layout = FieldLayout(Field(2, 2))
    with pytest.raises(ValueError):
        layout.update(Field(3, 2))


def test_layout_select_and_deselect():
    layout = FieldLayout(Field(2, 2))
    layout.select(Position(1, 0))
    assert layout[Position(1, 0)].fill_color() == WHITE
    layout.deselect(Position(1, 0))
    assert layout[Position(1, 0)].fill_color() == EARTH


def test_getitem_out_of_range():
    layout = FieldLayout(Field(2, 2))
    with pytest.raises(IndexError):
        layout[Position(2, 0)]