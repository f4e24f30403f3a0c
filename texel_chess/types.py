"""
Typed indices for the board model.

Piece and Color are used directly as list indices into the board's
bitboards; constructing them from a raw int raises ValueError when the
value is out of range.
"""
from __future__ import annotations

from enum import IntEnum, IntFlag

import chess

from texel_chess.errors import InvalidInputError


class Piece(IntEnum):
    PAWN = 0
    KNIGHT = 1
    BISHOP = 2
    ROOK = 3
    QUEEN = 4
    KING = 5

    @classmethod
    def from_chess(cls, piece_type: int) -> "Piece":
        # python-chess piece types start at 1
        return cls(piece_type - 1)

    @property
    def display_name(self) -> str:
        return chess.piece_name(self + 1).capitalize()


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @classmethod
    def from_chess(cls, color: bool) -> "Color":
        return cls.WHITE if color == chess.WHITE else cls.BLACK


class Castling(IntFlag):
    NONE = 0
    WHITE_SHORT = 0b0001
    WHITE_LONG = 0b0010
    BLACK_SHORT = 0b0100
    BLACK_LONG = 0b1000

    @classmethod
    def from_fen(cls, field: str) -> "Castling":
        rights = cls.NONE
        for c in field:
            if c == "-":
                continue
            try:
                rights |= _CASTLING_CHARS[c]
            except KeyError:
                raise InvalidInputError(f"Unexpected castling '{c}'") from None
        return rights

    def is_allowed(self, kind: "Castling") -> bool:
        return bool(self & kind)


_CASTLING_CHARS = {
    "K": Castling.WHITE_SHORT,
    "Q": Castling.WHITE_LONG,
    "k": Castling.BLACK_SHORT,
    "q": Castling.BLACK_LONG,
}

NUM_PIECES = len(Piece)
NUM_COLORS = len(Color)
NUM_SQUARES = 64

# Pieces that carry a material weight (the king does not)
MATERIAL_PIECES = (Piece.PAWN, Piece.KNIGHT, Piece.BISHOP, Piece.ROOK, Piece.QUEEN)
