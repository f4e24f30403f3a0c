"""
Bitboard board model.

A Board keeps one 64-bit square set per piece type and one per color; the
set for a (piece, color) pair is their intersection. Squares use the
little-endian rank-file mapping of python-chess (a1 = 0, h8 = 63).
"""
from __future__ import annotations

from typing import List, Optional, Tuple

import chess

from texel_chess.errors import InvalidInputError
from texel_chess.evaluation.features_game_phase import calculate_game_phase
from texel_chess.types import Castling, Color, Piece


class Board:
    """One parsed position. Treat as read-only once `parse_fen` returns it."""

    def __init__(self) -> None:
        self.turn: Color = Color.WHITE
        self.pieces: List[chess.SquareSet] = [chess.SquareSet() for _ in Piece]
        self.colors: List[chess.SquareSet] = [chess.SquareSet() for _ in Color]
        self.en_passant: Optional[chess.Square] = None
        self.castling: Castling = Castling.NONE
        # 1.0 = opening material, 0.0 = no non-pawn material left
        self.phase: float = 0.0

    @classmethod
    def from_fen(cls, fen: str) -> "Board":
        return parse_fen(fen)

    def of(self, piece: Piece, color: Color) -> chess.SquareSet:
        """Squares holding `piece` of `color` (a new set)."""
        return self.pieces[piece] & self.colors[color]

    def pieces_of(self, piece: Piece) -> chess.SquareSet:
        return chess.SquareSet(self.pieces[piece])

    def occupied(self, color: Optional[Color] = None) -> chess.SquareSet:
        if color is None:
            return self.colors[Color.WHITE] | self.colors[Color.BLACK]
        return chess.SquareSet(self.colors[color])

    def count(self, piece: Piece, color: Color) -> int:
        return len(self.of(piece, color))

    def piece_at(self, square: chess.Square) -> Optional[Tuple[Piece, Color]]:
        for piece in Piece:
            if square in self.pieces[piece]:
                color = Color.WHITE if square in self.colors[Color.WHITE] else Color.BLACK
                return piece, color
        return None

    def add_piece(self, piece: Piece, color: Color, square: chess.Square) -> None:
        self.pieces[piece].add(square)
        self.colors[color].add(square)

    def remove_piece(self, piece: Piece, color: Color, square: chess.Square) -> None:
        self.pieces[piece].discard(square)
        self.colors[color].discard(square)

    def __repr__(self) -> str:
        side = "w" if self.turn == Color.WHITE else "b"
        return f"<Board turn={side} pieces={len(self.occupied())} phase={self.phase:.3f}>"


def _parse_placement(board: Board, placement: str) -> None:
    rank, file = 7, 0
    for c in placement:
        if c == "/":
            if file != 8 or rank == 0:
                raise InvalidInputError(f"Malformed piece placement '{placement}'")
            rank -= 1
            file = 0
        elif c in "12345678":
            file += int(c)
            if file > 8:
                raise InvalidInputError(f"Rank overflow in piece placement '{placement}'")
        else:
            try:
                symbol = chess.Piece.from_symbol(c)
            except ValueError:
                raise InvalidInputError(f"Unexpected piece '{c}'") from None
            if file > 7:
                raise InvalidInputError(f"Rank overflow in piece placement '{placement}'")
            piece = Piece.from_chess(symbol.piece_type)
            color = Color.from_chess(symbol.color)
            board.add_piece(piece, color, chess.square(file, rank))
            file += 1
    if rank != 0 or file != 8:
        raise InvalidInputError(f"Piece placement must describe 8 full ranks: '{placement}'")


def parse_fen(fen: str) -> Board:
    """Build a Board from the first four FEN fields.

    Halfmove and fullmove counters, if present, are ignored.
    """
    parts = fen.split()
    if len(parts) < 4:
        raise InvalidInputError(f"Expected at least 4 FEN fields, got {len(parts)}: '{fen}'")
    placement, turn, castling, en_passant = parts[:4]

    board = Board()
    _parse_placement(board, placement)

    if turn == "w":
        board.turn = Color.WHITE
    elif turn == "b":
        board.turn = Color.BLACK
    else:
        raise InvalidInputError(f"Unexpected turn: '{turn}'")

    board.castling = Castling.from_fen(castling)

    if en_passant == "-":
        board.en_passant = None
    else:
        try:
            board.en_passant = chess.parse_square(en_passant)
        except ValueError:
            raise InvalidInputError(f"Unexpected en passant square: '{en_passant}'") from None

    board.phase = calculate_game_phase(board)
    return board
