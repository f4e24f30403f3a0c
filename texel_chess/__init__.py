"""
Texel Chess Package

Bitboard board model and sparse linear evaluation features used by the
texel tuner.
"""

from texel_chess.board import Board, parse_fen
from texel_chess.errors import InvalidInputError
from texel_chess.eval_main import evaluate, extract_features
from texel_chess.evaluation import Feature
from texel_chess.types import Castling, Color, Piece
from texel_chess.weights import SIZE_FEATURES, initial_weights

__all__ = [
    "Board",
    "Castling",
    "Color",
    "Feature",
    "InvalidInputError",
    "Piece",
    "SIZE_FEATURES",
    "evaluate",
    "extract_features",
    "initial_weights",
    "parse_fen",
]
__version__ = "1.0.0"
