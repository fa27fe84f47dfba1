"""Game domain models."""

from .statki import DEFAULT_BOARD_SIZE, AttackResult, Board, Cell, Ship

__all__ = ["AttackResult", "Board", "Cell", "DEFAULT_BOARD_SIZE", "Ship"]
