"""
Weight-vector layout and seed values.

The vector is a set of contiguous regions computed as running offsets:
material MG, material EG, piece-square MG, piece-square EG.
"""
import numpy as np

from texel_chess.types import MATERIAL_PIECES, NUM_PIECES, NUM_SQUARES, Piece

NUM_MATERIAL = len(MATERIAL_PIECES)
PSQT_SIZE = NUM_PIECES * NUM_SQUARES

IDX_MATERIAL_MG = 0
SIZE_MATERIAL_MG = IDX_MATERIAL_MG + NUM_MATERIAL

IDX_MATERIAL_EG = SIZE_MATERIAL_MG
SIZE_MATERIAL_EG = IDX_MATERIAL_EG + NUM_MATERIAL

IDX_PSQT_MG = SIZE_MATERIAL_EG
SIZE_PSQT_MG = IDX_PSQT_MG + PSQT_SIZE

IDX_PSQT_EG = SIZE_PSQT_MG
SIZE_PSQT_EG = IDX_PSQT_EG + PSQT_SIZE

SIZE_FEATURES = SIZE_PSQT_EG

# Initial, reasonable piece values in centipawns
PIECE_VALUE_PAWN = 100.0
PIECE_VALUE_KNIGHT = 300.0
PIECE_VALUE_BISHOP = 325.0
PIECE_VALUE_ROOK = 500.0
PIECE_VALUE_QUEEN = 900.0

DEFAULT_PIECE_VALUES = {
    Piece.PAWN: PIECE_VALUE_PAWN,
    Piece.KNIGHT: PIECE_VALUE_KNIGHT,
    Piece.BISHOP: PIECE_VALUE_BISHOP,
    Piece.ROOK: PIECE_VALUE_ROOK,
    Piece.QUEEN: PIECE_VALUE_QUEEN,
}
DEFAULT_WEIGHT = 10.0


def material_index(piece: Piece, endgame: bool = False) -> int:
    return (IDX_MATERIAL_EG if endgame else IDX_MATERIAL_MG) + piece


def psqt_index(piece: Piece, square: int, endgame: bool = False) -> int:
    return (IDX_PSQT_EG if endgame else IDX_PSQT_MG) + piece * NUM_SQUARES + square


def initial_weights() -> np.ndarray:
    """A fresh weight vector: seeded material values, DEFAULT_WEIGHT elsewhere.

    The caller owns the returned buffer; the tuner mutates it in place.
    """
    weights = np.full(SIZE_FEATURES, DEFAULT_WEIGHT, dtype=np.float64)
    for piece, value in DEFAULT_PIECE_VALUES.items():
        weights[material_index(piece)] = value
        weights[material_index(piece, endgame=True)] = value
    return weights
