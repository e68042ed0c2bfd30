"""
pairscore: pairwise similarity and distance matrices for aligned sequences.

Score models turn an alignment view into an N x N matrix of pairwise
scores, for use by tree building, PCA and similarity colouring.
"""

__version__ = "0.1.0"

from pairscore.matrix import Matrix
from pairscore.params import (
    JALVIEW,
    PID1,
    PID2,
    PID3,
    PID4,
    SEQ_SPACE,
    SimilarityParams,
)
from pairscore.errors import ConfigurationError, MatrixFileError, PairscoreError
from pairscore.io import Sequence, read_fasta, parse_score_matrix, read_score_matrix
from pairscore.view import AlignmentView, FeatureSet, SequenceFeature
from pairscore.align import LocalAligner, LocalAlignment
from pairscore.scoremodels import (
    FeatureDistanceModel,
    PIDModel,
    ScoreMatrix,
    ScoreModel,
    ScoreModels,
    SmithWatermanModel,
)

__all__ = [
    "Matrix",
    "SimilarityParams",
    "JALVIEW",
    "SEQ_SPACE",
    "PID1",
    "PID2",
    "PID3",
    "PID4",
    "ConfigurationError",
    "MatrixFileError",
    "PairscoreError",
    "Sequence",
    "read_fasta",
    "parse_score_matrix",
    "read_score_matrix",
    "AlignmentView",
    "FeatureSet",
    "SequenceFeature",
    "LocalAligner",
    "LocalAlignment",
    "ScoreModel",
    "ScoreMatrix",
    "PIDModel",
    "FeatureDistanceModel",
    "SmithWatermanModel",
    "ScoreModels",
]
