"""Smith-Waterman local alignment with affine gap penalties."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

import numpy as np

from pairscore.comparison import GAP_DASH, is_gap
from pairscore.errors import ConfigurationError

if TYPE_CHECKING:
    from pairscore.scoremodels.score_matrix import ScoreMatrix

DNA = "dna"
PEP = "pep"

_BUILTIN_RESOURCES = {PEP: "blosum62.scm", DNA: "dna.scm"}


@dataclass
class LocalAlignment:
    """Best-scoring local alignment between two ungapped sequences.

    Coordinates are 0-based, end exclusive, in the ungapped sequences.
    """

    score: float = 0.0
    seq1_start: int = 0
    seq1_end: int = 0
    seq2_start: int = 0
    seq2_end: int = 0
    aligned1: str = ""
    aligned2: str = ""


def strip_gaps(seq: str) -> str:
    return "".join(c for c in seq if not is_gap(c))


class LocalAligner:
    """Local aligner scoring residues with a substitution matrix per molecule type.

    *matrices* maps ``"dna"`` and ``"pep"`` to score matrices; the bundled
    DNA and BLOSUM62 matrices are used for any type not given. Calling the
    aligner returns just the maximal local alignment score.
    """

    def __init__(
        self,
        matrices: Optional[Mapping[str, "ScoreMatrix"]] = None,
        gap_open: float = 12.0,
        gap_extend: float = 2.0,
    ):
        if gap_open < 0 or gap_extend < 0:
            raise ConfigurationError("Gap penalties must not be negative")
        self._matrices: Dict[str, "ScoreMatrix"] = dict(matrices or {})
        self.gap_open = gap_open
        self.gap_extend = gap_extend

    def matrix_for(self, seq_type: str) -> "ScoreMatrix":
        if seq_type not in _BUILTIN_RESOURCES:
            raise ConfigurationError(f"Unknown sequence type {seq_type!r}: expected 'dna' or 'pep'")
        if seq_type not in self._matrices:
            from pairscore.io import load_builtin_matrix

            self._matrices[seq_type] = load_builtin_matrix(_BUILTIN_RESOURCES[seq_type])
        return self._matrices[seq_type]

    def __call__(self, seq1: str, seq2: str, seq_type: str) -> float:
        return self.align(seq1, seq2, seq_type).score

    def align(self, seq1: str, seq2: str, seq_type: str) -> LocalAlignment:
        """Align *seq1* against *seq2*, ignoring any gap characters in them."""
        sm = self.matrix_for(seq_type)
        a = strip_gaps(seq1)
        b = strip_gaps(seq2)
        n = len(a)
        m = len(b)
        if n == 0 or m == 0:
            return LocalAlignment()

        sub = np.array([[sm.pairwise_score(x, y) for y in b] for x in a], dtype=float)
        H, E, F = self._fill(sub)

        i, j = np.unravel_index(int(np.argmax(H)), H.shape)
        best = float(H[i, j])
        if best <= 0:
            return LocalAlignment()

        pairs, start_i, start_j = self._traceback(H, E, F, sub, int(i), int(j))
        aligned1 = "".join(a[p] if p is not None else GAP_DASH for p, _ in pairs)
        aligned2 = "".join(b[q] if q is not None else GAP_DASH for _, q in pairs)
        return LocalAlignment(
            score=best,
            seq1_start=start_i,
            seq1_end=int(i),
            seq2_start=start_j,
            seq2_end=int(j),
            aligned1=aligned1,
            aligned2=aligned2,
        )

    def _fill(self, sub: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        n, m = sub.shape
        NEG_INF = float("-inf")

        # H = best local score ending at (i, j); E = ending in a gap in seq1,
        # F = ending in a gap in seq2. Row/column 0 are the empty prefixes.
        H = np.zeros((n + 1, m + 1))
        E = np.full((n + 1, m + 1), NEG_INF)
        F = np.full((n + 1, m + 1), NEG_INF)

        go = self.gap_open
        ge = self.gap_extend
        for i in range(1, n + 1):
            for j in range(1, m + 1):
                E[i, j] = max(H[i, j - 1] - go, E[i, j - 1] - ge)
                F[i, j] = max(H[i - 1, j] - go, F[i - 1, j] - ge)
                H[i, j] = max(0.0, H[i - 1, j - 1] + sub[i - 1, j - 1], E[i, j], F[i, j])
        return H, E, F

    def _traceback(
        self,
        H: np.ndarray,
        E: np.ndarray,
        F: np.ndarray,
        sub: np.ndarray,
        i: int,
        j: int,
    ) -> Tuple[List[Tuple[Optional[int], Optional[int]]], int, int]:
        pairs: List[Tuple[Optional[int], Optional[int]]] = []
        state = "H"
        while i > 0 and j > 0:
            if state == "H":
                if H[i, j] <= 0:
                    break
                if abs(H[i, j] - (H[i - 1, j - 1] + sub[i - 1, j - 1])) < 1e-9:
                    pairs.append((i - 1, j - 1))
                    i -= 1
                    j -= 1
                elif abs(H[i, j] - E[i, j]) < 1e-9:
                    state = "E"
                else:
                    state = "F"
            elif state == "E":
                pairs.append((None, j - 1))
                if abs(E[i, j] - (H[i, j - 1] - self.gap_open)) < 1e-9:
                    state = "H"
                j -= 1
            else:
                pairs.append((i - 1, None))
                if abs(F[i, j] - (H[i - 1, j] - self.gap_open)) < 1e-9:
                    state = "H"
                i -= 1

        pairs.reverse()
        return pairs, i, j
