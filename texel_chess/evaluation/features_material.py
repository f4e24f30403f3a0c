from __future__ import annotations

from typing import TYPE_CHECKING, List

from texel_chess.evaluation.feature import Feature
from texel_chess.types import MATERIAL_PIECES, Color
from texel_chess.weights import material_index

if TYPE_CHECKING:
    from texel_chess.board import Board


def get_material_features(board: "Board") -> List[Feature]:
    """Piece-count differences (White - Black), split into MG and EG by phase.

    Both halves are emitted for every non-zero difference, even when the
    phase scales one of them to 0.
    """
    features: List[Feature] = []
    phase = board.phase
    eg_phase = 1.0 - phase

    for piece in MATERIAL_PIECES:
        diff = board.count(piece, Color.WHITE) - board.count(piece, Color.BLACK)
        if diff == 0:
            continue
        features.append(Feature(material_index(piece), diff * phase))
        features.append(Feature(material_index(piece, endgame=True), diff * eg_phase))
    return features
