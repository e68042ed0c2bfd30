"""Score models: substitution matrix, percent identity, feature and local alignment scoring."""

from pairscore.scoremodels.base import (
    Direction,
    DistanceScoreModel,
    PairwiseScoreModel,
    ScoreModel,
    SimilarityScoreModel,
    convert,
    distance_to_similarity,
    similarity_to_distance,
)
from pairscore.scoremodels.score_matrix import ScoreMatrix
from pairscore.scoremodels.pid import PIDModel
from pairscore.scoremodels.feature_distance import FeatureDistanceModel
from pairscore.scoremodels.smith_waterman import SmithWatermanModel
from pairscore.scoremodels.registry import ScoreModels

__all__ = [
    "Direction",
    "DistanceScoreModel",
    "PairwiseScoreModel",
    "ScoreModel",
    "SimilarityScoreModel",
    "convert",
    "distance_to_similarity",
    "similarity_to_distance",
    "ScoreMatrix",
    "PIDModel",
    "FeatureDistanceModel",
    "SmithWatermanModel",
    "ScoreModels",
]
