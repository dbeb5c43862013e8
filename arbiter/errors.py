"""Exception types raised by move resolution and application."""

from __future__ import annotations


class ArbiterError(Exception):
    """Base class for every error the engine raises."""

    code = "ArbiterError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class NotationError(ArbiterError, ValueError):
    code = "NotationError"


class IllegalMoveError(ArbiterError, ValueError):
    """A move the current position does not allow. The board is left untouched."""

    code = "IllegalMove"


class IllegalSameColorTarget(IllegalMoveError):
    code = "IllegalSameColorTarget"


class NoPieceCanMove(IllegalMoveError):
    code = "NoPieceCanMove"


class NoPawnCanMove(IllegalMoveError):
    code = "NoPawnCanMove"


class AmbiguousMove(IllegalMoveError):
    code = "AmbiguousMove"


class AmbiguousCapture(AmbiguousMove):
    code = "AmbiguousCapture"


class DisambiguationMismatch(IllegalMoveError):
    code = "DisambiguationMismatch"


class NoPawnCanCapture(IllegalMoveError):
    code = "NoPawnCanCapture"


class CaptureOnEmptySquare(IllegalMoveError):
    code = "CaptureOnEmptySquare"


class CastlingRookMissing(IllegalMoveError):
    code = "CastlingRookMissing"


class CastlingPathBlocked(IllegalMoveError):
    code = "CastlingPathBlocked"


class CastlingRightsRevoked(IllegalMoveError):
    code = "CastlingRightsRevoked"


class CastlingThroughCheck(IllegalMoveError):
    code = "CastlingThroughCheck"


class KingLeftInCheck(IllegalMoveError):
    code = "KingLeftInCheck"


class InvalidPromotion(IllegalMoveError):
    code = "InvalidPromotion"


class IncompleteMove(ArbiterError, ValueError):
    """Raised when an unresolved descriptor reaches :meth:`Board.apply`."""

    code = "IncompleteMove"


class GameOverError(ArbiterError):
    code = "GameOver"


class KingMissing(ArbiterError, RuntimeError):
    """The board lost a king; the session holding it cannot continue."""

    code = "KingMissing"
