import pytest

from hexcells.game import Cell, Field, Phase, PlayerData, Position


@pytest.mark.parametrize(
    "phase, text",
    [
        (Phase.WAIT, "<wait>"),
        (Phase.ATTACK, "<attack>"),
        (Phase.FEED, "<feed>"),
        (Phase.WIN, "<win>"),
        (Phase.LOSE, "<lose>"),
    ],
)
def test_phase_str(phase, text):
    assert str(phase) == text


def test_player_defaults_and_str():
    player = PlayerData()
    assert player.nickname == "Player"
    assert player.id == 0
    assert str(PlayerData("bob", id=3)) == "Player3(bob)"


def test_position_str():
    assert str(Position(x=4, y=7)) == "{4,7}"


def test_cell_defaults_and_clamp():
    cell = Cell()
    assert cell.capacity == Cell.DEFAULT_CAPACITY == 8
    assert cell.empty()
    assert Cell(size=50).size == Cell.DEFAULT_CAPACITY


def test_cell_str():
    assert str(Cell(2, 1)) == "[2/8:1]"


def test_cell_init_and_discard():
    cell = Cell()
    cell.init(5)
    assert cell.size == 2
    assert cell.belongs_to(5)
    assert not cell.empty()
    cell.discard()
    assert cell.size == 0
    assert cell.owner == 0


def test_field_dimensions():
    field = Field(4, 3)
    assert field.width() == 4
    assert field.height() == 3
    assert Field().width() == 0
    assert Field().height() == 0


def test_field_index_out_of_range():
    field = Field(2, 2)
    with pytest.raises(IndexError):
        field[Position(2, 0)]
    with pytest.raises(IndexError):
        field[Position(0, 2)]
    with pytest.raises(IndexError):
        field[Position(-1, 0)] = Cell()


def test_field_setitem_roundtrip():
    field = Field(3, 3)
    cell = Cell(4, 2)
    field[Position(1, 2)] = cell
    assert field[Position(1, 2)] is cell


@pytest.mark.parametrize(
    "target, expected",
    [
        (Cell(3, 2), "[2/8:1]"),
        (Cell(8, 2), "[3/8:2]"),
        (Cell(5, 2), "[0/8:0]"),
    ],
)
def test_attack_documented_examples(target, expected):
    field = Field(3, 3)
    who, whom = Position(0, 0), Position(1, 0)
    field[who] = Cell(6, 1)
    field[whom] = target
    field.attack(who, whom)
    assert str(field[who]) == "[1/8:1]"
    assert str(field[whom]) == expected


def test_attack_empty_cell_takes_mass():
    field = Field(3, 3)
    who, whom = Position(0, 0), Position(1, 0)
    field[who] = Cell(6, 1)
    field.attack(who, whom)
    assert field[whom].owner == 1
    assert field[who].size == 1
    assert field[who].size + field[whom].size == 6


def test_may_attack():
    field = Field(3, 3)
    who, whom = Position(0, 0), Position(1, 0)
    field[who] = Cell(4, 1)
    field[whom] = Cell(2, 2)
    assert field.may_attack(1, who, whom)
    assert not field.may_attack(2, who, whom)
    assert not field.may_attack(1, who, Position(5, 5))
    field[whom] = Cell(2, 1)
    assert not field.may_attack(1, who, whom)
    field[whom] = Cell(2, 2)
    field[who] = Cell(1, 1)
    assert not field.may_attack(1, who, whom)


def test_feed_grows_cell():
    field = Field(2, 2)
    pos = Position(1, 1)
    field[pos] = Cell(3, 1)
    before = field[pos].size
    field.feed(pos)
    assert field[pos].size == before + 1
    assert field[pos].owner == 1


def test_may_feed():
    field = Field(2, 2)
    field[Position(0, 0)] = Cell(3, 1)
    field[Position(1, 0)] = Cell(8, 1)
    field[Position(0, 1)] = Cell(3, 2)
    assert field.may_feed(1, Position(0, 0))
    assert not field.may_feed(1, Position(1, 0))
    assert not field.may_feed(1, Position(0, 1))
    assert not field.may_feed(1, Position(9, 9))


def test_reachable_neighbours():
    field = Field(5, 5)
    a = Position(2, 2)
    assert field.reachable(a, Position(3, 2))
    assert field.reachable(a, Position(1, 2))
    assert not field.reachable(a, a)
    assert not field.reachable(a, Position(4, 2))
    # even row: neighbours above are x and x-1
    assert field.reachable(a, Position(1, 1))
    assert field.reachable(a, Position(2, 1))
    assert not field.reachable(a, Position(3, 1))
    # odd row: neighbours above are x and x+1
    b = Position(2, 1)
    assert field.reachable(b, Position(3, 0))
    assert not field.reachable(b, Position(1, 0))
    assert not field.reachable(a, Position(9, 2))


def test_count_and_belongs_to():
    field = Field(2, 2)
    field[Position(0, 0)] = Cell(3, 1)
    field[Position(1, 1)] = Cell(4, 1)
    assert field.count(1) == 3 + 4
    assert field.count(2) == 0
    assert not field.belongs_to(1)
    for pos in (Position(1, 0), Position(0, 1)):
        field[pos] = Cell(1, 1)
    assert field.belongs_to(1)


def test_discard_returns_positions_in_row_order():
    field = Field(3, 3)
    owned = [Position(2, 0), Position(0, 1), Position(1, 2)]
    for pos in owned:
        field[pos] = Cell(3, 7)
    assert field.discard(7) == owned
    assert field.count(7) == 0
    assert all(field[pos].empty() for pos in owned)


def test_resize_clears_field():
    field = Field(2, 2)
    field[Position(0, 0)] = Cell(3, 1)
    field.resize(3, 4)
    assert field.height() == 3
    assert field.width() == 4
    assert field.count(1) == 0


def test_nest_prefers_corners_then_first_free():
    field = Field(3, 3)
    corners = {Position(0, 0), Position(2, 0), Position(0, 2), Position(2, 2)}
    nests = [field.nest(owner) for owner in range(1, 5)]
    assert set(nests) == corners
    assert nests[0] == Position(0, 0)
    for owner, pos in enumerate(nests, start=1):
        assert field[pos].belongs_to(owner)
        assert field[pos].size == 2
    fifth = field.nest(5)
    assert fifth not in corners
    assert field[fifth].belongs_to(5)


def test_nest_full_field_raises():
    field = Field(1, 1)
    field.nest(1)
    with pytest.raises(ValueError):
        field.nest(2)


def test_field_str_layout():
    field = Field(3, 4)
    field[Position(1, 0)] = Cell(2, 1)
    lines = str(field).splitlines()
    assert len(lines) == field.height()
    assert not lines[0].startswith(" ")
    assert lines[1].startswith("    ")
    assert not lines[2].startswith(" ")
    assert all(line.count("[") == field.width() for line in lines)
    assert "[2/8:1]" in lines[0]