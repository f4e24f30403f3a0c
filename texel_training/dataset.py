"""
Labeled position files.

Two line formats are understood, chosen by file extension:

  .epd           <FEN fields> c9 "<result>";      result in 1-0 / 0-1 / 1/2-1/2
  .book, .txt    <FEN fields...> [<float>]        float in 0.0 / 0.5 / 1.0

Labels are always from White's point of view. Any malformed line aborts the
whole load; blank lines are skipped.
"""
from __future__ import annotations

import os
import re
from typing import Callable, Iterator, List, Tuple

from tqdm import tqdm

from texel_chess.board import Board, parse_fen
from texel_chess.errors import InvalidInputError
from texel_training.positions import Position

EPD_SEPARATOR = " c9 "
EPD_RESULTS = {
    '"1-0";': 1.0,
    '"0-1";': 0.0,
    '"1/2-1/2";': 0.5,
}

BOOK_LABELS = (0.0, 0.5, 1.0)
_BOOK_LINE = re.compile(r"^(?P<fen>.+?)\s+\[(?P<label>[^\]]*)\]$")

EPD_EXTENSIONS = (".epd",)
BOOK_EXTENSIONS = (".book", ".txt")

LineParser = Callable[[str], Tuple[Board, float]]


def parse_epd_line(line: str) -> Tuple[Board, float]:
    fen, sep, label = line.strip().partition(EPD_SEPARATOR)
    if not sep:
        raise InvalidInputError(f"Missing '{EPD_SEPARATOR.strip()}' result opcode: '{line.strip()}'")
    try:
        result = EPD_RESULTS[label.strip()]
    except KeyError:
        raise InvalidInputError(f"Invalid label: '{label.strip()}'") from None
    return parse_fen(fen), result


def parse_book_line(line: str) -> Tuple[Board, float]:
    m = _BOOK_LINE.match(line.strip())
    if m is None:
        raise InvalidInputError(f"Missing bracketed label: '{line.strip()}'")
    try:
        label = float(m.group("label"))
    except ValueError:
        raise InvalidInputError(f"Invalid label: '[{m.group('label')}]'") from None
    if label not in BOOK_LABELS:
        raise InvalidInputError(f"Label out of range: '[{m.group('label')}]'")
    return parse_fen(m.group("fen")), label


def parser_for(path: str) -> LineParser:
    """Pick the line parser from the file extension (case-insensitive)."""
    ext = os.path.splitext(path)[1].lower()
    if ext in EPD_EXTENSIONS:
        return parse_epd_line
    if ext in BOOK_EXTENSIONS:
        return parse_book_line
    raise InvalidInputError(f"Unknown file extension '{ext}' for {path}")


def iter_labeled_boards(path: str, verbose: bool = False) -> Iterator[Tuple[Board, float]]:
    parse_line = parser_for(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(path)

    with open(path, "r", encoding="utf-8") as f:
        lines = f.readlines()

    for lineno, line in enumerate(
        tqdm(lines, desc=f"Parsing {os.path.basename(path)}", unit="pos", disable=not verbose), start=1
    ):
        if not line.strip():
            continue
        try:
            yield parse_line(line)
        except InvalidInputError as exc:
            raise InvalidInputError(f"{path}:{lineno}: {exc}") from exc


def load_positions(path: str, verbose: bool = False) -> List[Position]:
    """Parse a whole file into feature-extracted positions."""
    return [Position.from_board(board, label) for board, label in iter_labeled_boards(path, verbose=verbose)]
