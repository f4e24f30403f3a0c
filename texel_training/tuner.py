#!/usr/bin/env python3
"""
Texel tuning of material values and piece-square tables.

Stages:
1) Parse labeled positions (EPD or book files) into sparse feature lists.
2) Search the logistic scaling constant k that best fits the seed weights.
3) Mini-batch gradient descent on the squared error between
   sigmoid(evaluation) and the game result, with step-decayed learning rate.
4) Print the tuned tables (and optionally save them as a Python module).

Usage:
    texel-tune data/quiet-labeled.epd [more files...]
    python -m texel_training.tuner data/positions.book --epochs 500
"""
from __future__ import annotations

import argparse
import random
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np
from tqdm import tqdm

from texel_chess.errors import InvalidInputError
from texel_chess.weights import initial_weights
from texel_training.dataset import load_positions
from texel_training.positions import FlatBatch, Position, PositionStore, flatten
from texel_training.report import format_weights, save_weights

# =============================
# Configuration
# =============================
EPOCHS = 300
BATCH_SIZE = 10_000
LEARNING_RATE = 3.0
LR_DECAY_EVERY = 100      # epochs between learning-rate drops
LR_DECAY_FACTOR = 10.0
RANDOM_SEED = 42

# k grid: 0.0, 0.1, ..., 19.9
K_CANDIDATES = 200
K_RESOLUTION = 10.0

# Conventional rating denominator of the logistic curve
SIGMOID_SCALE = 400.0

Positions = Union[PositionStore, List[Position]]


@dataclass
class TuningConfig:
    epochs: int = EPOCHS
    batch_size: int = BATCH_SIZE
    learning_rate: float = LEARNING_RATE
    lr_decay_every: int = LR_DECAY_EVERY
    lr_decay_factor: float = LR_DECAY_FACTOR
    seed: Optional[int] = RANDOM_SEED


# =============================
# Model
# =============================

def sigmoid(x, k: float):
    """1 / (1 + 10^(-k*x/400)). Works on scalars and numpy arrays."""
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.power(10.0, -k * np.asarray(x, dtype=np.float64) / SIGMOID_SCALE))


def predict(position: Position, weights: np.ndarray, k: float) -> float:
    score = float(np.dot(position.coefficients, weights[position.indices]))
    return float(sigmoid(score, k))


def _predict_batch(batch: FlatBatch, weights: np.ndarray, k: float) -> np.ndarray:
    terms = batch.coefficients * weights[batch.indices]
    scores = np.bincount(batch.owners, weights=terms, minlength=len(batch.labels))
    return sigmoid(scores, k)


def _batch_error(batch: FlatBatch, weights: np.ndarray, k: float) -> float:
    if len(batch.labels) == 0:
        raise InvalidInputError("Cannot compute error over an empty position set")
    predictions = _predict_batch(batch, weights, k)
    return float(np.mean((batch.labels - predictions) ** 2))


def mean_squared_error(positions: Sequence[Position], weights: np.ndarray, k: float) -> float:
    """Mean of (label - prediction)^2 over every position.

    Diverged weights give NaN rather than an error.
    """
    return _batch_error(flatten(positions), weights, k)


# =============================
# Optimal k
# =============================

def find_optimal_k(positions: Sequence[Position], weights: np.ndarray) -> float:
    """Grid search for the k that best calibrates the current weights.

    Stops at the first candidate that does not improve on the best so far,
    i.e. assumes MSE(k) is unimodal. Returns 0.0 if k = 0.1 is already no
    better than k = 0.0.
    """
    batch = flatten(positions)
    best_k = 0.0
    best_mse = float("inf")

    for step in range(K_CANDIDATES):
        k = step / K_RESOLUTION
        mse = _batch_error(batch, weights, k)
        if mse < best_mse:
            best_k = k
            best_mse = mse
        else:
            break

    return best_k


# =============================
# Gradient descent
# =============================

def learning_rate_at(epoch: int, config: TuningConfig) -> float:
    """Step decay: divided by `lr_decay_factor` every `lr_decay_every` epochs (0-based)."""
    return config.learning_rate / config.lr_decay_factor ** (epoch // config.lr_decay_every)


def compute_gradient(positions: Sequence[Position], weights: np.ndarray, k: float) -> np.ndarray:
    """Per-index averaged update direction for one batch.

    Indices that no position in the batch touches keep a gradient of
    exactly 0.
    """
    batch = flatten(positions)
    errors = batch.labels - _predict_batch(batch, weights, k)
    terms = errors[batch.owners] * batch.coefficients * weights[batch.indices]

    gradient = np.bincount(batch.indices, weights=terms, minlength=weights.size)
    counts = np.bincount(batch.indices, minlength=weights.size)
    touched = counts > 0
    gradient[touched] /= counts[touched]
    return gradient


def tune(
    positions: Positions,
    weights: np.ndarray,
    k: float,
    config: Optional[TuningConfig] = None,
    verbose: bool = True,
) -> List[float]:
    """Run `config.epochs` epochs of mini-batch gradient descent.

    `weights` is updated in place. A `PositionStore` is reordered in place
    once per epoch; a plain list is copied into a fresh store first. Returns
    the dataset MSE measured at the start of each epoch.

    A learning rate too large for the data drives the weights to inf/NaN.
    The run still completes, and the report prints NaN weights as 0.
    """
    if config is None:
        config = TuningConfig()
    store = positions if isinstance(positions, PositionStore) else PositionStore(positions)
    if len(store) == 0:
        raise InvalidInputError("No positions to tune on")
    if config.batch_size <= 0:
        raise ValueError(f"batch size must be positive, got {config.batch_size}")

    rng = random.Random(config.seed)
    # Order does not matter for the error, so one flat copy serves every epoch
    everything = flatten(store)
    history: List[float] = []

    for epoch in tqdm(range(config.epochs), desc="Tuning", unit="epoch", disable=not verbose):
        with np.errstate(over="ignore", invalid="ignore"):
            mse = _batch_error(everything, weights, k)
            history.append(mse)
            if verbose:
                tqdm.write(f"#{epoch + 1:<3} MSE: {mse:.8f}")

            lr = learning_rate_at(epoch, config)
            store.shuffle(rng)
            for batch in store.batches(config.batch_size):
                weights += lr * compute_gradient(batch, weights, k)

    return history


# =============================
# Orchestrator
# =============================

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Texel-tune material and piece-square weights.")
    parser.add_argument("paths", nargs="+", help="labeled position files (.epd, .book, .txt)")
    parser.add_argument("--epochs", type=int, default=EPOCHS)
    parser.add_argument("--batch-size", type=int, default=BATCH_SIZE)
    parser.add_argument("--learning-rate", type=float, default=LEARNING_RATE)
    parser.add_argument("--seed", type=int, default=RANDOM_SEED)
    parser.add_argument("--k", type=float, default=None, help="skip the k search and use this value")
    parser.add_argument("--output", default=None, help="also write the weights as a Python module")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> np.ndarray:
    store = PositionStore()
    for path in args.paths:
        print(f"Preparing positions from {path}...")
        store.extend(load_positions(path, verbose=True))
    print(f"Loaded {len(store)} positions")

    weights = initial_weights()

    if args.k is None:
        print("Finding optimal k...")
        k = find_optimal_k(store, weights)
    else:
        k = args.k
    print(f"Optimal k: {k}")

    config = TuningConfig(
        epochs=args.epochs,
        batch_size=args.batch_size,
        learning_rate=args.learning_rate,
        seed=args.seed,
    )

    print("Starting tuning...")
    start = time.time()
    tune(store, weights, k, config)
    print(f"Tuning finished in {time.time() - start:.1f}s")

    print()
    print(format_weights(weights))

    if args.output:
        save_weights(weights, args.output)
    return weights


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        run(args)
    except InvalidInputError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
