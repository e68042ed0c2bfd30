"""Similarity score model using Smith-Waterman local alignment scores."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from pairscore.align import DNA, PEP, LocalAligner
from pairscore.comparison import GAP_DASH
from pairscore.matrix import Matrix
from pairscore.params import SimilarityParams
from pairscore.scoremodels.base import SimilarityScoreModel

if TYPE_CHECKING:
    from pairscore.view import AlignmentView

logger = logging.getLogger(__name__)

# (seq1, seq2, "dna" | "pep") -> maximal local alignment score
Aligner = Callable[[str, str, str], float]


class SmithWatermanModel(SimilarityScoreModel):
    """Similarity as the best local alignment score of each sequence pair.

    Only pairs ``(i, j)`` with ``j >= i`` are aligned and the lower
    triangle is left at zero unless *mirror* is set.
    """

    def __init__(self, aligner: Optional[Aligner] = None, mirror: bool = False):
        self.aligner: Aligner = aligner if aligner is not None else LocalAligner()
        self.mirror = mirror

    @property
    def name(self) -> str:
        return "Smith Waterman Score"

    def compute(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        seqs = view.get_sequence_strings(GAP_DASH)
        seq_type = DNA if view.is_nucleotide() else PEP
        n = len(seqs)
        logger.debug("Aligning %d sequences pairwise as %s", n, seq_type)

        values = np.zeros((n, n), dtype=float)
        for i in range(n):
            for j in range(i, n):
                values[i, j] = self.aligner(seqs[i], seqs[j], seq_type)
                if self.mirror:
                    values[j, i] = values[i, j]
        return Matrix(values)
