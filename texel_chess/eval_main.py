from __future__ import annotations

from typing import List, Sequence

import numpy as np

from texel_chess.board import Board
from texel_chess.evaluation import Feature, get_material_features, get_pst_features


def extract_features(board: Board) -> List[Feature]:
    """
    Sparse features of a position: material first, then piece-square terms.
    Terms come in MG/EG pairs, one pair per non-zero count or square
    difference, so the list grows with the number of pieces on the board
    rather than with the weight vector. A pair counts as a touch of both
    weights during tuning even when the phase zeroes one coefficient.
    """
    features = get_material_features(board)
    features.extend(get_pst_features(board))
    return features


def evaluate_features(features: Sequence[Feature], weights: np.ndarray) -> float:
    return float(sum(f.coefficient * weights[f.index] for f in features))


def evaluate(board: Board, weights: np.ndarray) -> float:
    """Linear evaluation in centipawns from White's point of view."""
    return evaluate_features(extract_features(board), weights)
