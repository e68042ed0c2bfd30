"""Distance score model based on displayed sequence features."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Set

import numpy as np

from pairscore.matrix import Matrix
from pairscore.params import SimilarityParams
from pairscore.scoremodels.base import DistanceScoreModel

if TYPE_CHECKING:
    from pairscore.view import AlignmentView, FeatureSource

logger = logging.getLogger(__name__)


class FeatureDistanceModel(DistanceScoreModel):
    """Distance as the number of feature types not shared, per column.

    For each visible column, each pair of sequences scores the number of
    displayed feature types found on one sequence but not the other. The
    per-pair sums are averaged over the visible columns.

    Instances are bound to one view's feature data: get one through
    :meth:`bind_to_view` and do not share it between views.
    """

    view_dependent = True

    def __init__(self, features: Optional["FeatureSource"] = None):
        self._features = features

    @property
    def name(self) -> str:
        return "Sequence Feature Similarity"

    @property
    def features(self) -> Optional["FeatureSource"]:
        return self._features

    def bind_to_view(self, view: Optional["AlignmentView"]) -> "FeatureDistanceModel":
        return FeatureDistanceModel(view.features if view is not None else None)

    def compute(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        n = len(view)
        distances = np.zeros((n, n), dtype=float)

        if self._features is None or not self._features.displayed_feature_types():
            logger.debug("No feature types displayed; returning zero distances")
            return Matrix(distances)

        positions = [view.residue_positions(i) for i in range(n)]
        columns = 0
        for start, end in view.visible_contigs():
            for column in range(start, end + 1):
                columns += 1
                types_at = self.find_feature_types_at_column(view, column, positions)
                for i in range(n - 1):
                    for j in range(i + 1, n):
                        set1 = types_at[i]
                        set2 = types_at[j]
                        # gap-gap scores zero anyway
                        if (set1 is not None and set2 is not None) or params.include_gaps:
                            distances[i, j] += len((set1 or set()) ^ (set2 or set()))

        if columns:
            distances /= columns
        lower = np.tril_indices(n, -1)
        distances[lower] = distances.T[lower]
        return Matrix(distances)

    def find_feature_types_at_column(
        self,
        view: "AlignmentView",
        column: int,
        positions: Optional[List[np.ndarray]] = None,
    ) -> List[Optional[Set[str]]]:
        """Displayed feature types at *column* per sequence; None where gapped.

        *positions* holds :meth:`AlignmentView.residue_positions` for each
        sequence, when already computed.
        """
        if positions is None:
            positions = [view.residue_positions(i) for i in range(len(view))]
        result: List[Optional[Set[str]]] = []
        for seq, seq_positions in zip(view.sequences, positions):
            position = int(seq_positions[column]) if column < len(seq_positions) else 0
            if position == 0:
                result.append(None)
            else:
                result.append(set(self._features.feature_types_at(seq.name, position)))
        return result
