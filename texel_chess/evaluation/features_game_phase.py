from __future__ import annotations

from typing import TYPE_CHECKING

from texel_chess.types import Piece

if TYPE_CHECKING:
    from texel_chess.board import Board

# Non-pawn material weights; a full set for both sides sums to 24
PHASE_WEIGHTS = {
    Piece.KNIGHT: 1,
    Piece.BISHOP: 1,
    Piece.ROOK: 2,
    Piece.QUEEN: 4,
}
FULL_PHASE_MATERIAL = 24


def calculate_game_phase(board: "Board") -> float:
    """
    Returns a scalar in [0.0, 1.0]. 1.0 ~ opening/middlegame, 0.0 ~ pure endgame
    based on remaining non-pawn, non-king material. Promotions can push the
    raw sum above 24, so it is capped at 1.0.
    """
    remaining = sum(len(board.pieces[piece]) * weight for piece, weight in PHASE_WEIGHTS.items())
    return min(1.0, remaining / FULL_PHASE_MATERIAL)
