"""
Evaluation Features Package

Sparse linear features for the tuned evaluation:
- Material counts (middlegame and endgame)
- Piece-square tables (middlegame and endgame)
- Game phase
"""

from .feature import Feature
from .features_game_phase import calculate_game_phase
from .features_material import get_material_features
from .features_pst import get_pst_features

__all__ = [
    "Feature",
    "calculate_game_phase",
    "get_material_features",
    "get_pst_features",
]
