"""Substitution matrix score model (e.g. BLOSUM62, PAM250)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np

from pairscore.comparison import GAP_DASH, iter_scored_columns
from pairscore.errors import ConfigurationError
from pairscore.matrix import Matrix
from pairscore.params import SimilarityParams
from pairscore.scoremodels.base import PairwiseScoreModel

if TYPE_CHECKING:
    from pairscore.view import AlignmentView

logger = logging.getLogger(__name__)

UNMAPPED = -1
MAX_ASCII = 127

# Score for a symbol not in the alphabet compared with itself
UNKNOWN_IDENTITY_SCORE = 1.0

# Alphabets at least this long are taken to be amino acids
_PEPTIDE_ALPHABET_SIZE = 20


class ScoreMatrix(PairwiseScoreModel):
    """Scores aligned sequences by summing substitution matrix lookups.

    ``scores[i][j]`` is the score for replacing ``alphabet[i]`` with
    ``alphabet[j]``. Upper-case symbols also match their lower-case form
    unless that lower-case character is itself in the alphabet.

    With *score_gap_as_any*, gaps are scored as the "any residue" symbol
    (``N`` for nucleotides, ``X`` for peptides) rather than as ``-``.
    """

    def __init__(
        self,
        name: str,
        alphabet: Sequence[str],
        scores: Sequence[Sequence[float]],
        description: Optional[str] = None,
        score_gap_as_any: bool = False,
    ):
        if len(alphabet) != len(scores):
            raise ConfigurationError("score matrix size must match alphabet size")
        for row in scores:
            if len(row) != len(alphabet):
                raise ConfigurationError("score matrix size must be square")

        self._name = name
        self._description = description
        self.symbols = "".join(alphabet)
        self.score_gap_as_any = score_gap_as_any
        self._matrix = np.array(scores, dtype=np.float32).reshape(
            len(alphabet), len(alphabet)
        )
        self.symbol_index = self.build_symbol_index(self.symbols)

        if self._matrix.size:
            self.min_value = float(self._matrix.min())
            self.max_value = float(self._matrix.max())
        else:
            self.min_value = float(np.finfo(np.float32).max)
            self.max_value = -float(np.finfo(np.float32).max)
        self.symmetric = bool(np.array_equal(self._matrix, self._matrix.T))
        self.is_peptide = len(alphabet) >= _PEPTIDE_ALPHABET_SIZE

    @staticmethod
    def build_symbol_index(alphabet: Sequence[str]) -> np.ndarray:
        """Map ASCII code points to alphabet positions (``-1`` if unmapped).

        Each upper-case symbol also maps its lower-case form, unless the
        lower-case character was already mapped explicitly. Symbols outside
        ASCII are skipped but still use up a position.
        """
        index = np.full(MAX_ASCII + 1, UNMAPPED, dtype=np.int16)
        for pos, c in enumerate(alphabet):
            code = ord(c)
            if code <= MAX_ASCII:
                index[code] = pos
            if "A" <= c <= "Z":
                lower = ord(c.lower())
                if index[lower] == UNMAPPED:
                    index[lower] = pos
        return index

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def is_dna(self) -> bool:
        return not self.is_peptide

    @property
    def is_protein(self) -> bool:
        return self.is_peptide

    @property
    def size(self) -> int:
        return len(self.symbols)

    def get_matrix(self) -> np.ndarray:
        """Return a copy of the score table."""
        return self._matrix.copy()

    def get_matrix_index(self, c: str) -> int:
        code = ord(c)
        if code < len(self.symbol_index):
            return int(self.symbol_index[code])
        return UNMAPPED

    def pairwise_score(self, c: str, d: str) -> float:
        """Score for substituting *c* by *d*.

        Unmapped symbols score 1 against themselves and the matrix minimum
        against anything else. Non-ASCII characters score 0.
        """
        c_code = ord(c)
        d_code = ord(d)
        if c_code > MAX_ASCII or d_code > MAX_ASCII:
            logger.warning(
                "Unexpected character %r in pairwise_score for %s",
                c if c_code > MAX_ASCII else d,
                self._name,
            )
            return 0.0

        c_index = self.symbol_index[c_code]
        d_index = self.symbol_index[d_code]
        if c_index != UNMAPPED and d_index != UNMAPPED:
            return float(self._matrix[c_index, d_index])

        return UNKNOWN_IDENTITY_SCORE if c == d else self.min_value

    def compute(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        if self.score_gap_as_any:
            gap_char = "N" if view.is_nucleotide() else "X"
        else:
            gap_char = GAP_DASH
        return self.find_similarities_for(view.get_sequence_strings(gap_char), params)

    def find_similarities_for(self, seqs: List[str], params: SimilarityParams) -> Matrix:
        """Similarity matrix for plain aligned strings.

        Only the upper triangle is computed when the score table is
        symmetric; otherwise every ordered pair is scored.
        """
        n = len(seqs)
        logger.debug("Scoring %d sequences with %s", n, self._name)
        values = np.zeros((n, n), dtype=float)
        for row in range(n):
            for col in range(row if self.symmetric else 0, n):
                total = self.compute_similarity(seqs[row], seqs[col], params)
                values[row, col] = total
                if self.symmetric:
                    values[col, row] = total
        return Matrix(values)

    def compute_similarity(self, seq1: str, seq2: str, params: SimilarityParams) -> float:
        """Sum of pairwise scores over the columns *params* includes."""
        total = 0.0
        for c1, c2, _, _ in iter_scored_columns(seq1, seq2, params):
            total += self.pairwise_score(c1, c2)
        return total

    def output_matrix(self, html: bool = False) -> str:
        """Render the matrix as ScoreMatrix text or as an HTML table."""
        parts: List[str] = []
        if html:
            parts.append('<table border="1"><tr><th></th>')
        else:
            parts.append(f"ScoreMatrix {self._name}\n")

        for sym in self.symbols:
            parts.append(f"<th>&nbsp;{sym}&nbsp;</th>" if html else f"\t{sym}")
        parts.append("</tr>\n" if html else "\n")

        for i, c1 in enumerate(self.symbols):
            parts.append(f"<tr><td>{c1}</td>" if html else c1)
            for j in range(len(self.symbols)):
                value = format(float(self._matrix[i, j]), "g")
                parts.append(f"<td>{value}</td>" if html else f"\t{value}")
            parts.append("</tr>\n" if html else "\n")

        if html:
            parts.append("</table>")
        return "".join(parts)

    def __str__(self) -> str:
        return self.output_matrix(False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreMatrix):
            return NotImplemented
        return self.symbols == other.symbols and np.array_equal(self._matrix, other._matrix)

    def __hash__(self) -> int:
        return hash((self.symbols, self._matrix.tobytes()))
