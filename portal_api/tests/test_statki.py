import pytest

from portal_api.domain import InvariantViolation
from portal_api.domain.games import AttackResult, Board, Cell, Ship


def test_attacking_hidden_ship_cell_reveals_and_destroys() -> None:
    ship = Ship(name="kuter")
    cell = Cell(x=1, y=2, ship=ship)

    assert cell.key == "12"
    assert cell.attack() is AttackResult.HIT
    assert cell.hidden is False
    assert ship.destroyed is True
    assert cell.miss is False


def test_attacking_empty_cell_marks_miss() -> None:
    cell = Cell(x=0, y=0)

    assert cell.attack() is AttackResult.MISS
    assert cell.hidden is False
    assert cell.miss is True


def test_repeated_attack_is_idempotent() -> None:
    ship = Ship(name="niszczyciel", size=2)
    board = Board(size=4)
    board.place_ship(ship, [(0, 0), (1, 0)])

    assert board.attack(0, 0) is AttackResult.HIT
    assert board.attack(0, 0) is AttackResult.HIT
    assert ship.hits == 1
    assert ship.destroyed is True

    assert board.attack(3, 3) is AttackResult.MISS
    assert board.attack(3, 3) is AttackResult.MISS
    assert board.cell(3, 3).miss is True


def test_first_hit_destroys_a_multi_cell_ship() -> None:
    board = Board(size=3)
    ship = Ship(name="lodz", size=2)
    board.place_ship(ship, [(0, 0), (1, 0)])

    assert board.attack(0, 0) is AttackResult.HIT
    assert ship.destroyed is True
    assert board.cell(1, 0).hidden is True
    assert board.all_ships_destroyed() is True


def test_board_is_cleared_once_each_ship_is_hit() -> None:
    board = Board(size=5)
    board.place_ship(Ship(name="krazownik", size=3), [(1, 1), (1, 2), (1, 3)])
    board.place_ship(Ship(name="kuter"), [(4, 4)])

    board.attack(1, 2)
    assert board.ships[0].destroyed is True
    assert board.all_ships_destroyed() is False

    board.attack(4, 4)
    assert board.all_ships_destroyed() is True


def test_own_board_cells_start_visible() -> None:
    board = Board(size=3, hidden=False)

    assert all(not cell.hidden for cell in board)
    assert len(list(board)) == 9


def test_place_ship_rejects_overlap_and_wrong_length() -> None:
    board = Board(size=5)
    board.place_ship(Ship(name="kuter"), [(0, 0)])

    with pytest.raises(InvariantViolation):
        board.place_ship(Ship(name="kuter"), [(0, 0)])
    with pytest.raises(InvariantViolation):
        board.place_ship(Ship(name="niszczyciel", size=2), [(2, 2)])
    with pytest.raises(InvariantViolation):
        board.place_ship(Ship(name="niszczyciel", size=2), [(2, 2), (2, 2)])


def test_cell_outside_board_is_rejected() -> None:
    board = Board(size=10)

    with pytest.raises(InvariantViolation) as excinfo:
        board.cell(10, 0)
    assert excinfo.value.field == "coordinates"


def test_empty_board_has_no_winner() -> None:
    assert Board().all_ships_destroyed() is False
