"""Score model interface and the distance/similarity duality."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Optional

from pairscore.matrix import Matrix
from pairscore.params import SimilarityParams

if TYPE_CHECKING:
    from pairscore.view import AlignmentView


class Direction(Enum):
    """Which view of a pairwise comparison a model computes natively."""

    SIMILARITY = "similarity"
    DISTANCE = "distance"


def distance_to_similarity(distances: Matrix) -> Matrix:
    """Flip a distance matrix into similarities: ``min + max - d``.

    The input is not modified.
    """
    similarities = distances.copy()
    similarities.reverse_range(False)
    return similarities


def similarity_to_distance(similarities: Matrix) -> Matrix:
    """Turn similarities into distances: ``max - s``.

    The most similar pair maps to distance zero. The input is not modified.
    """
    distances = similarities.copy()
    distances.reverse_range(True)
    return distances


def convert(matrix: Matrix, to: Direction) -> Matrix:
    """Convert *matrix* (in the other direction) into direction *to*."""
    if to is Direction.SIMILARITY:
        return distance_to_similarity(matrix)
    return similarity_to_distance(matrix)


class ScoreModel(ABC):
    """A strategy producing an N x N score matrix for an alignment view.

    Subclasses compute one :class:`Direction` natively (``primary``) and
    get the other one by range reversal. Models whose results depend on
    per-view state set ``view_dependent`` and return a fresh instance from
    :meth:`bind_to_view`.
    """

    primary: Direction = Direction.SIMILARITY
    view_dependent: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    def description(self) -> Optional[str]:
        return None

    @property
    def is_dna(self) -> bool:
        return True

    @property
    def is_protein(self) -> bool:
        return True

    @abstractmethod
    def compute(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        """Compute the matrix in the model's ``primary`` direction."""

    def find_similarities(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        result = self.compute(view, params)
        if self.primary is Direction.SIMILARITY:
            return result
        return convert(result, Direction.SIMILARITY)

    def find_distances(self, view: "AlignmentView", params: SimilarityParams) -> Matrix:
        result = self.compute(view, params)
        if self.primary is Direction.DISTANCE:
            return result
        return convert(result, Direction.DISTANCE)

    def bind_to_view(self, view: Optional["AlignmentView"]) -> "ScoreModel":
        """Return a model ready to score *view*; shared models return self."""
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class SimilarityScoreModel(ScoreModel):
    """Base for models that compute similarities and derive distances."""

    primary = Direction.SIMILARITY


class DistanceScoreModel(ScoreModel):
    """Base for models that compute distances and derive similarities."""

    primary = Direction.DISTANCE


class PairwiseScoreModel(SimilarityScoreModel):
    """A similarity model built on a per-character pairwise score."""

    @abstractmethod
    def pairwise_score(self, c: str, d: str) -> float:
        ...
