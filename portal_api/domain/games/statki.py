# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Board model for statki, the battleship-style game.

Each cell starts hidden (on the opponent's board) or visible (on the
player's own board). Attacking a cell reveals it. A cell carrying a ship
registers a hit on that ship and marks it destroyed. An empty cell records a
miss. Attacking the same cell again changes nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from portal_api.domain.exceptions import InvariantViolation

DEFAULT_BOARD_SIZE = 10


class AttackResult(str, Enum):
    HIT = "hit"
    MISS = "miss"


@dataclass(slots=True, eq=False)
class Ship:
    name: str
    size: int = 1
    hits: int = 0
    destroyed: bool = False

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvariantViolation("ship size must be positive", field="size")

    def register_hit(self) -> None:
        # a single hit sinks the ship regardless of its size
        self.hits = min(self.size, self.hits + 1)
        self.destroyed = True


@dataclass(slots=True, eq=False)
class Cell:
    x: int
    y: int
    hidden: bool = True
    ship: Ship | None = None
    miss: bool = False
    hit: bool = False

    @property
    def key(self) -> str:
        return f"{self.x}{self.y}"

    @property
    def occupied(self) -> bool:
        return self.ship is not None

    def attack(self) -> AttackResult:
        self.hidden = False
        if self.ship is None:
            self.miss = True
            return AttackResult.MISS
        if not self.hit:
            self.hit = True
            self.ship.register_hit()
        return AttackResult.HIT


@dataclass(slots=True, eq=False)
class Board:
    size: int = DEFAULT_BOARD_SIZE
    hidden: bool = True
    ships: list[Ship] = field(default_factory=list)
    _cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvariantViolation("board size must be positive", field="size")
        self._cells = [
            [Cell(x=x, y=y, hidden=self.hidden) for x in range(self.size)]
            for y in range(self.size)
        ]

    def __iter__(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def cell(self, x: int, y: int) -> Cell:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise InvariantViolation(f"({x}, {y}) is outside the board", field="coordinates")
        return self._cells[y][x]

    def place_ship(self, ship: Ship, coordinates: Iterable[tuple[int, int]]) -> None:
        cells = [self.cell(x, y) for x, y in coordinates]
        if len(cells) != ship.size:
            raise InvariantViolation(
                f"ship {ship.name!r} needs {ship.size} cells, got {len(cells)}",
                field="coordinates",
            )
        if len({(c.x, c.y) for c in cells}) != len(cells):
            raise InvariantViolation("ship cells must be distinct", field="coordinates")
        if any(c.occupied for c in cells):
            raise InvariantViolation("cell already occupied", field="coordinates")
        for c in cells:
            c.ship = ship
        self.ships.append(ship)

    def attack(self, x: int, y: int) -> AttackResult:
        return self.cell(x, y).attack()

    def all_ships_destroyed(self) -> bool:
        return bool(self.ships) and all(ship.destroyed for ship in self.ships)


__all__ = ["AttackResult", "Board", "Cell", "DEFAULT_BOARD_SIZE", "Ship"]
