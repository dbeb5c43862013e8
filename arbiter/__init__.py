"""Chess move resolution and rules engine."""

from .board import Board, Piece
from .game import Game
from .move import MoveDescriptor
from .outcome import Outcome, Status, classify
from .resolver import resolve

__all__ = ["Board", "Game", "MoveDescriptor", "Outcome", "Piece", "Status", "classify", "resolve"]
