from __future__ import annotations

from typing import TYPE_CHECKING, List

import chess

from texel_chess.evaluation.feature import Feature
from texel_chess.types import Color, Piece
from texel_chess.weights import psqt_index

if TYPE_CHECKING:
    from texel_chess.board import Board


def get_pst_features(board: "Board") -> List[Feature]:
    """Piece-square indicators, mirrored for Black.

    A White piece on `sq` and a Black piece on `square_mirror(sq)` share the
    same table entry and cancel out.
    """
    features: List[Feature] = []
    phase = board.phase
    eg_phase = 1.0 - phase

    white = [board.of(piece, Color.WHITE) for piece in Piece]
    black = [board.of(piece, Color.BLACK) for piece in Piece]

    for sq in chess.SQUARES:
        mirrored = chess.square_mirror(sq)
        for piece in Piece:
            diff = int(sq in white[piece]) - int(mirrored in black[piece])
            if diff == 0:
                continue
            features.append(Feature(psqt_index(piece, sq), diff * phase))
            features.append(Feature(psqt_index(piece, sq, endgame=True), diff * eg_phase))
    return features
