import chess
import numpy as np
import pytest

from conftest import SAMPLE_FENS, START_FEN
from texel_chess import Piece, evaluate, extract_features, initial_weights, parse_fen
from texel_chess.weights import (
    IDX_MATERIAL_EG,
    IDX_MATERIAL_MG,
    IDX_PSQT_EG,
    IDX_PSQT_MG,
    SIZE_FEATURES,
    material_index,
    psqt_index,
)


def _as_dict(features):
    return {f.index: f.coefficient for f in features}


def test_weight_layout():
    assert (IDX_MATERIAL_MG, IDX_MATERIAL_EG, IDX_PSQT_MG, IDX_PSQT_EG) == (0, 5, 10, 394)
    assert SIZE_FEATURES == 778
    assert psqt_index(Piece.KING, chess.H8, endgame=True) == SIZE_FEATURES - 1


def test_initial_weights():
    weights = initial_weights()

    assert weights.shape == (SIZE_FEATURES,)
    assert list(weights[IDX_MATERIAL_MG:IDX_MATERIAL_EG]) == [100.0, 300.0, 325.0, 500.0, 900.0]
    assert list(weights[IDX_MATERIAL_EG:IDX_PSQT_MG]) == [100.0, 300.0, 325.0, 500.0, 900.0]
    assert np.all(weights[IDX_PSQT_MG:] == 10.0)


def test_initial_weights_are_independent_buffers():
    a = initial_weights()
    b = initial_weights()
    a[0] = -1.0
    assert b[0] == 100.0


@pytest.mark.parametrize("fen", SAMPLE_FENS)
def test_features_are_sparse_and_in_range(fen):
    features = extract_features(parse_fen(fen))

    assert len(features) <= SIZE_FEATURES
    assert all(0 <= f.index < SIZE_FEATURES for f in features)
    assert len({f.index for f in features}) == len(features)

    # MG/EG pairs whose coefficients sum back to the unscaled difference
    assert len(features) % 2 == 0
    for mg, eg in zip(features[::2], features[1::2]):
        assert eg.index - mg.index in (IDX_MATERIAL_EG - IDX_MATERIAL_MG, IDX_PSQT_EG - IDX_PSQT_MG)
        assert abs(mg.coefficient + eg.coefficient) >= 1 - 1e-9


@pytest.mark.parametrize("fen", SAMPLE_FENS)
def test_mirrored_position_negates_features(fen):
    mirrored_fen = chess.Board(fen).mirror().fen()

    original = _as_dict(extract_features(parse_fen(fen)))
    mirrored = _as_dict(extract_features(parse_fen(mirrored_fen)))

    assert mirrored.keys() == original.keys()
    for index, coefficient in original.items():
        assert mirrored[index] == -coefficient


def test_start_position_has_no_material_imbalance():
    features = extract_features(parse_fen(START_FEN))
    material = [f for f in features if f.index < IDX_PSQT_MG]
    assert material == []
    # Fully symmetric, so the piece-square terms cancel as well
    assert features == []


def test_bare_kings_on_mirrored_squares_cancel():
    features = extract_features(parse_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1"))
    assert not any(f.index < IDX_PSQT_MG for f in features)
    assert features == []


def test_one_king_term_per_color():
    # White king d1, Black king e8 (mirrors onto e1)
    features = _as_dict(extract_features(parse_fen("4k3/8/8/8/8/8/8/3K4 w - - 0 1")))

    # No non-pawn material, so the MG halves are present but zero
    assert features == {
        psqt_index(Piece.KING, chess.D1): 0.0,
        psqt_index(Piece.KING, chess.D1, endgame=True): 1.0,
        psqt_index(Piece.KING, chess.E1): 0.0,
        psqt_index(Piece.KING, chess.E1, endgame=True): -1.0,
    }


def test_material_features_split_by_phase():
    board = parse_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    features = _as_dict(extract_features(board))
    phase = 2 / 24

    assert features[material_index(Piece.ROOK)] == pytest.approx(phase)
    assert features[material_index(Piece.ROOK, endgame=True)] == pytest.approx(1 - phase)
    assert features[psqt_index(Piece.ROOK, chess.A1)] == pytest.approx(phase)
    assert features[psqt_index(Piece.ROOK, chess.A1, endgame=True)] == pytest.approx(1 - phase)
    assert len(features) == 4


def test_material_coefficient_is_count_difference():
    # White has three extra pawns, Black an extra knight
    board = parse_fen("4k3/8/2n5/8/8/8/PPP5/4K3 w - - 0 1")
    features = _as_dict(extract_features(board))

    assert features[material_index(Piece.PAWN, endgame=True)] == pytest.approx(3 * (1 - board.phase))
    assert features[material_index(Piece.KNIGHT)] == pytest.approx(-1 * board.phase)


def test_full_phase_keeps_zero_endgame_terms():
    board = parse_fen("rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1")
    features = extract_features(board)

    assert board.phase == 1.0
    assert features
    endgame = [f for f in features if IDX_MATERIAL_EG <= f.index < IDX_PSQT_MG or f.index >= IDX_PSQT_EG]
    assert len(endgame) == len(features) // 2
    assert all(f.coefficient == 0.0 for f in endgame)
    assert _as_dict(features)[psqt_index(Piece.PAWN, chess.E4, endgame=True)] == 0.0


def test_evaluate_is_linear_in_weights():
    board = parse_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
    # Rook material (500) plus the flat rook square weight (10), both phases summed
    assert evaluate(board, initial_weights()) == pytest.approx(510.0)
    assert evaluate(board, 2 * initial_weights()) == pytest.approx(1020.0)
