"""
Rendering of a tuned weight vector.

Tables are laid out the way an evaluation function declares them: rank 8
first, files a to h, so the text can be pasted straight into source.
"""
from __future__ import annotations

import math
from typing import List

import chess
import numpy as np

from texel_chess.types import MATERIAL_PIECES, Piece
from texel_chess.weights import IDX_MATERIAL_EG, IDX_MATERIAL_MG, IDX_PSQT_EG, IDX_PSQT_MG, NUM_SQUARES

CELL_WIDTH = 3


def rounded(value: float):
    """Round half away from zero; a NaN (never-observed weight) becomes 0."""
    value = float(value)
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return value
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def material_row(weights: np.ndarray, endgame: bool = False) -> List[int]:
    start = IDX_MATERIAL_EG if endgame else IDX_MATERIAL_MG
    return [rounded(weights[start + piece]) for piece in MATERIAL_PIECES]


def psqt_grid(weights: np.ndarray, piece: Piece, endgame: bool = False) -> List[List[int]]:
    """8 rows of 8 values, rank 8 down to rank 1."""
    start = (IDX_PSQT_EG if endgame else IDX_PSQT_MG) + piece * NUM_SQUARES
    return [
        [rounded(weights[start + chess.square(file, rank)]) for file in range(8)]
        for rank in range(7, -1, -1)
    ]


def _row(values) -> str:
    return ", ".join(f"{v:>{CELL_WIDTH}}" for v in values) + ","


def format_weights(weights: np.ndarray) -> str:
    lines: List[str] = []
    for endgame, name in ((False, "MG"), (True, "EG")):
        lines.append(f"// Material {name}")
        lines.append(_row(material_row(weights, endgame)))
    lines.append("")

    for endgame, name in ((False, "MG"), (True, "EG")):
        for piece in Piece:
            lines.append(f"// {piece.display_name} {name}")
            lines.extend(_row(row) for row in psqt_grid(weights, piece, endgame))
            lines.append("")
    return "\n".join(lines)


def save_weights(weights: np.ndarray, out_path: str) -> None:
    """Write the tuned tables as an importable Python module.

    WARNING: This will overwrite the file at out_path if it exists.
    """
    lines: List[str] = []
    lines.append("# Auto-generated by texel_training.tuner\n")
    lines.append("# Tuned material values and piece-square tables (centipawns).\n")
    lines.append("# Tables run from rank 8 to rank 1, files a to h.\n\n")

    for endgame, name in ((False, "MG"), (True, "EG")):
        lines.append(f"MATERIAL_{name} = [{', '.join(str(v) for v in material_row(weights, endgame))}]\n")
    lines.append("\n")

    for endgame, name in ((False, "MG"), (True, "EG")):
        for piece in Piece:
            lines.append(f"PST_{piece.name}_{name} = [\n")
            for row in psqt_grid(weights, piece, endgame):
                lines.append(f"    {_row(row)}\n")
            lines.append("]\n")
    with open(out_path, "w", encoding="utf-8") as f:
        f.writelines(lines)
    print(f"Saved tuned weights to {out_path}")
