"""Sequence and score matrix I/O – FASTA reading and ScoreMatrix file parsing."""

from __future__ import annotations

import gzip
import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Generator, Iterable, List, Optional, Tuple, Union

from pairscore.errors import MatrixFileError

if TYPE_CHECKING:
    from pairscore.scoremodels.score_matrix import ScoreMatrix

SCOREMATRIX = "SCOREMATRIX"
COMMENT_CHAR = "#"
_DELIMITERS = re.compile(r"[ ,\t]+")


@dataclass
class Sequence:
    """A named aligned sequence."""

    name: str
    seq: str


def read_fasta(filepath: Union[str, Path]) -> Generator[Tuple[str, str], None, None]:
    """Yield (name, sequence) tuples from a FASTA file.

    Supports plain-text and gzip-compressed files (.gz).
    """
    filepath = Path(filepath)
    opener = gzip.open if filepath.suffix == ".gz" else open
    mode = "rt"

    name: str | None = None
    parts: list[str] = []

    with opener(filepath, mode) as fh:  # type: ignore[arg-type]
        for line in fh:
            line = line.rstrip("\n").rstrip("\r")
            if line.startswith(">"):
                if name is not None:
                    yield name, "".join(parts)
                name = line[1:].split()[0]
                parts = []
            else:
                parts.append(line)
        if name is not None:
            yield name, "".join(parts)


def _tokens(line: str) -> List[str]:
    return [t for t in _DELIMITERS.split(line.strip()) if t]


def parse_score_matrix(lines: Union[str, Iterable[str]]) -> "ScoreMatrix":
    """Parse a substitution matrix in ScoreMatrix format.

    The first non-comment line is ``ScoreMatrix <name>``, followed by a line
    of column symbols and then one line of scores per symbol. Rows may
    start with their symbol as a guide column, and may hold only the lower
    triangle (row *i* has *i + 1* values), in which case the matrix is
    filled in symmetrically. Values may be separated by spaces, commas or
    tabs; ``#`` starts a comment line.
    """
    from pairscore.scoremodels.score_matrix import ScoreMatrix

    if isinstance(lines, str):
        lines = lines.splitlines()

    name: Optional[str] = None
    alphabet: Optional[List[str]] = None
    scores: List[List[float]] = []
    size = 0
    row = 0
    has_guide_column = False
    lower_diagonal_only = False

    for line_no, data in enumerate(lines, start=1):
        data = data.strip()
        if not data or data.startswith(COMMENT_CHAR):
            continue

        if data[: len(SCOREMATRIX)].upper() == SCOREMATRIX:
            if name is not None:
                raise MatrixFileError(
                    f"Error: 'ScoreMatrix' repeated in file at line {line_no}"
                )
            parts = data.split(None, 1)
            if len(parts) < 2:
                raise MatrixFileError(
                    f"Format error: expected 'ScoreMatrix <name>', found "
                    f"'{data}' at line {line_no}"
                )
            name = parts[1].strip()
            continue

        if name is None:
            raise MatrixFileError(
                "Format error: 'ScoreMatrix <name>' should be the first non-comment line"
            )

        # column headings
        if alphabet is None:
            alphabet = [t[0] for t in _tokens(data)]
            size = len(alphabet)
            scores = [[0.0] * size for _ in range(size)]
            continue

        if row >= size:
            raise MatrixFileError(
                f"Unexpected extra input line in score model file: '{data}'"
            )

        tokens = _tokens(data)
        if row == 0:
            has_guide_column = tokens[0] == alphabet[0]
            value_count = len(tokens) - (1 if has_guide_column else 0)
            lower_diagonal_only = value_count == 1 and size > 1
        if has_guide_column:
            symbol = tokens.pop(0)
            if symbol != alphabet[row]:
                raise MatrixFileError(
                    f"Error parsing score matrix at line {line_no}, expected "
                    f"'{alphabet[row]}' but found '{symbol}'"
                )

        expected = row + 1 if lower_diagonal_only else size
        if len(tokens) != expected:
            raise MatrixFileError(
                f"Expected {expected} scores at line {line_no}: '{data}' but "
                f"found {len(tokens)}"
            )

        for col, value in enumerate(tokens):
            try:
                score = float(value)
            except ValueError:
                raise MatrixFileError(
                    f"Invalid score value '{value}' at line {line_no} column {col}"
                ) from None
            scores[row][col] = score
            if lower_diagonal_only:
                scores[col][row] = score
        row += 1

    if name is None or alphabet is None:
        raise MatrixFileError("No score matrix found in input")
    if row < size:
        raise MatrixFileError(
            f"Expected {size} rows of score data in score matrix but only found {row}"
        )
    return ScoreMatrix(name, "".join(alphabet), scores)


def read_score_matrix(filepath: Union[str, Path]) -> "ScoreMatrix":
    """Read a ScoreMatrix file (plain or gzipped)."""
    filepath = Path(filepath)
    opener = gzip.open if filepath.suffix == ".gz" else open
    with opener(filepath, "rt") as fh:  # type: ignore[arg-type]
        return parse_score_matrix(fh)


def load_builtin_matrix(resource: str) -> "ScoreMatrix":
    """Load one of the matrices bundled in ``pairscore/data``."""
    source = resources.files("pairscore.data").joinpath(resource)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise MatrixFileError(
            f"Cannot read score matrix resource '{resource}': {exc}"
        ) from exc
    return parse_score_matrix(text)
