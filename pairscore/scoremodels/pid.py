"""Percentage identity score model."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

import numpy as np

from pairscore.comparison import GAP_DASH, is_gap, iter_scored_columns
from pairscore.matrix import Matrix
from pairscore.params import SimilarityParams
from pairscore.scoremodels.base import PairwiseScoreModel

if TYPE_CHECKING:
    from pairscore.view import AlignmentView

logger = logging.getLogger(__name__)


class PIDModel(PairwiseScoreModel):
    """Scores sequence pairs by percentage identity.

    Similarities are rescaled by ``width / 100`` so that they read as a
    count of identical columns, which is what PCA expects.
    """

    @property
    def name(self) -> str:
        return "PID"

    @property
    def description(self) -> str:
        return "Percentage identity"

    def pairwise_score(self, c: str, d: str) -> float:
        """1 if *c* and *d* are the same residue (ignoring case), else 0."""
        if is_gap(c) or is_gap(d):
            return 0.0
        return 1.0 if c.upper() == d.upper() else 0.0

    def compute(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        result = self.find_similarities_for(view.get_sequence_strings(GAP_DASH), params)
        result.multiply(view.width / 100.0)
        return result

    def find_distances(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        result = super().find_distances(view, params)
        if view.width != 0:
            result.multiply(100.0 / view.width)
        return result

    def find_similarities_for(self, seqs: List[str], params: SimilarityParams) -> Matrix:
        """PID for every pair of *seqs*; the result is symmetric."""
        n = len(seqs)
        logger.debug("Computing percent identity for %d sequences", n)
        values = np.zeros((n, n), dtype=float)
        for i in range(n):
            for j in range(i, n):
                pid = self.compute_pid(seqs[i], seqs[j], params)
                values[i, j] = pid
                values[j, i] = pid
        return Matrix(values)

    @classmethod
    def compute_pid(cls, seq1: str, seq2: str, params: SimilarityParams) -> float:
        """Percentage (0-100) of included columns that count as matches.

        Gap-gap columns, when included, always match. Gap-residue columns,
        when included, match only with ``match_gaps``. Returns 0 when no
        column is included.
        """
        total = 0
        divide_by = 0
        for c1, c2, gap1, gap2 in iter_scored_columns(seq1, seq2, params):
            divide_by += 1
            if gap1 and gap2:
                total += 1
            elif gap1 or gap2:
                if params.match_gaps:
                    total += 1
            elif c1.upper() == c2.upper():
                total += 1

        if divide_by == 0:
            return 0.0
        return 100.0 * total / divide_by
