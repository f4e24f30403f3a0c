import pytest

START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Assorted positions used across the board and feature tests
SAMPLE_FENS = [
    START_FEN,
    "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
    "rnbqkbnr/pppp1ppp/8/8/4Pp2/8/PPPP2PP/RNBQKBNR b KQkq e3 0 3",
    "r4rk1/1pp1qppp/p1np1n2/2b1p1B1/2B1P1b1/P1NP1N2/1PP1QPPP/R4RK1 w - - 0 10",
    "8/5pk1/6p1/3R4/8/6P1/5PK1/2r5 b - - 1 40",
    "4k3/8/8/8/8/8/8/4K3 w - - 0 1",
    "8/2P5/8/8/8/8/5p2/K6k w - - 0 60",
]


@pytest.fixture
def start_fen():
    return START_FEN
