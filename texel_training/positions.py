"""
In-memory position store.

Boards are turned into sparse feature arrays once, at load time, and then
thrown away; only (indices, coefficients, label) survive across epochs.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Optional, Sequence, Union

import numpy as np

from texel_chess.board import Board
from texel_chess.eval_main import extract_features
from texel_chess.evaluation import Feature


@dataclass(eq=False)
class Position:
    indices: np.ndarray
    coefficients: np.ndarray
    # 1.0 = White won, 0.5 = draw, 0.0 = Black won
    label: float

    @classmethod
    def from_features(cls, features: Sequence[Feature], label: float) -> "Position":
        indices = np.fromiter((f.index for f in features), dtype=np.intp, count=len(features))
        coefficients = np.fromiter((f.coefficient for f in features), dtype=np.float64, count=len(features))
        return cls(indices, coefficients, float(label))

    @classmethod
    def from_board(cls, board: Board, label: float) -> "Position":
        return cls.from_features(extract_features(board), label)

    @property
    def features(self) -> List[Feature]:
        return [Feature(int(i), float(c)) for i, c in zip(self.indices, self.coefficients)]

    def __len__(self) -> int:
        return len(self.indices)


class FlatBatch(NamedTuple):
    """Concatenated features of several positions.

    `owners[j]` is the row (position) that feature j belongs to.
    """

    indices: np.ndarray
    coefficients: np.ndarray
    owners: np.ndarray
    labels: np.ndarray


def flatten(positions: Sequence[Position]) -> FlatBatch:
    n = len(positions)
    labels = np.fromiter((p.label for p in positions), dtype=np.float64, count=n)
    if n == 0:
        empty = np.empty(0, dtype=np.intp)
        return FlatBatch(empty, np.empty(0, dtype=np.float64), empty, labels)
    lengths = np.fromiter((len(p) for p in positions), dtype=np.intp, count=n)
    indices = np.concatenate([p.indices for p in positions]).astype(np.intp, copy=False)
    coefficients = np.concatenate([p.coefficients for p in positions])
    owners = np.repeat(np.arange(n, dtype=np.intp), lengths)
    return FlatBatch(indices, coefficients, owners, labels)


class PositionStore:
    """Every labeled position of a tuning run.

    Contents never change after loading; only the order does (one shuffle
    per epoch).
    """

    def __init__(self, positions: Optional[Iterable[Position]] = None) -> None:
        self._positions: List[Position] = list(positions) if positions is not None else []

    def add(self, position: Position) -> None:
        self._positions.append(position)

    def extend(self, positions: Iterable[Position]) -> None:
        self._positions.extend(positions)

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self._positions)

    def batches(self, size: int) -> Iterator[List[Position]]:
        """Contiguous slices of `size` positions; the last one may be shorter."""
        if size <= 0:
            raise ValueError(f"batch size must be positive, got {size}")
        for start in range(0, len(self._positions), size):
            yield self._positions[start:start + size]

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

    def __getitem__(self, index: Union[int, slice]) -> Union[Position, List[Position]]:
        return self._positions[index]
