"""Shared test fixtures for pairscore tests."""

import pytest

from pairscore.io import Sequence
from pairscore.view import AlignmentView, FeatureSet, SequenceFeature


@pytest.fixture(scope="session")
def score_models():
    """Registry with the built-in models loaded."""
    from pairscore import ScoreModels
    return ScoreModels()


@pytest.fixture
def blosum62(score_models):
    return score_models.blosum62


@pytest.fixture
def acde_matrix():
    """Symmetric 4x4 matrix: 5 on the diagonal, -1 elsewhere."""
    from pairscore import ScoreMatrix
    scores = [[5 if i == j else -1 for j in range(4)] for i in range(4)]
    return ScoreMatrix("ACDE", "ACDE", scores)


@pytest.fixture
def protein_view():
    """Four short peptides, one of them gapped."""
    return AlignmentView.from_strings(["FKL", "R-D", "QIA", "GWC"])


@pytest.fixture
def feature_view():
    """Two sequences with overlapping features.

    s1 FR K S : chain and domain on residues 1-4
    s2 FS  L  : chain, metal and Pfam on residues 1-3
    """
    features = FeatureSet()
    features.add("s1", SequenceFeature("chain", 1, 4))
    features.add("s1", SequenceFeature("domain", 1, 4))
    features.add("s2", SequenceFeature("chain", 1, 3))
    features.add("s2", SequenceFeature("metal", 1, 3))
    features.add("s2", SequenceFeature("Pfam", 1, 3))
    return AlignmentView(
        [Sequence("s1", "FR K S"), Sequence("s2", "FS  L")],
        features=features,
    )
