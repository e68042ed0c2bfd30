"""Tests for the score model registry."""

import logging
import threading

import pytest

from pairscore.errors import MatrixFileError
from pairscore.io import load_builtin_matrix
from pairscore.params import JALVIEW
from pairscore.scoremodels import (
    FeatureDistanceModel,
    PIDModel,
    ScoreMatrix,
    ScoreModels,
)
from pairscore.scoremodels.registry import PAM250_RESOURCE
from pairscore.view import AlignmentView, FeatureSet

BUILTIN_NAMES = ["BLOSUM62", "PAM250", "DNA", "PID", "Sequence Feature Similarity"]


@pytest.fixture
def registry():
    return ScoreModels()


class TestBuiltins:
    def test_order(self, registry):
        assert registry.names() == BUILTIN_NAMES
        assert [m.name for m in registry.models()] == BUILTIN_NAMES
        assert len(registry) == 5

    def test_matrices(self, registry):
        assert isinstance(registry.blosum62, ScoreMatrix)
        assert registry.blosum62.name == "BLOSUM62"
        assert registry.pam250.name == "PAM250"
        assert registry.dna.name == "DNA"

    def test_default_model(self, registry):
        assert registry.default_model(True) is registry.blosum62
        assert registry.default_model(False) is registry.dna

    def test_contains(self, registry):
        assert "PID" in registry
        assert "pid" not in registry


class TestLookup:
    def test_shared_instance(self, registry, protein_view):
        first = registry.lookup("BLOSUM62", protein_view)
        assert first is registry.lookup("BLOSUM62")
        assert isinstance(registry.lookup("PID"), PIDModel)

    def test_unknown_name(self, registry):
        assert registry.lookup("NOSUCHMODEL") is None

    def test_view_dependent_model_bound(self, registry, feature_view, protein_view):
        m1 = registry.lookup("Sequence Feature Similarity", feature_view)
        m2 = registry.lookup("Sequence Feature Similarity", protein_view)
        assert isinstance(m1, FeatureDistanceModel)
        assert m1 is not m2
        assert m1.features is feature_view.features
        assert m2.features is None

    def test_bound_model_scores_view(self, registry, feature_view):
        model = registry.lookup("Sequence Feature Similarity", feature_view)
        distances = model.find_distances(feature_view, JALVIEW)
        assert distances.get_value(0, 1) == pytest.approx(13 / 6)


class TestRegister:
    def test_register_new(self, registry, acde_matrix):
        registry.register(acde_matrix)
        assert registry.names() == BUILTIN_NAMES + ["ACDE"]
        assert registry.lookup("ACDE") is acde_matrix

    def test_replace_keeps_position(self, registry, caplog):
        replacement = ScoreMatrix("PAM250", "AB", [[1, 0], [0, 1]])
        with caplog.at_level(logging.WARNING, logger="pairscore.scoremodels.registry"):
            registry.register(replacement)
        assert "Replacing score model PAM250" in caplog.text
        assert registry.names() == BUILTIN_NAMES
        assert registry.lookup("PAM250") is replacement

    def test_reset_discards_registered(self, registry, acde_matrix):
        registry.register(acde_matrix)
        registry.reset()
        assert registry.names() == BUILTIN_NAMES
        assert registry.lookup("ACDE") is None

    def test_snapshot_unaffected_by_register(self, registry, acde_matrix):
        names = registry.names()
        models = registry.models()
        registry.register(acde_matrix)
        assert names == BUILTIN_NAMES
        assert len(list(models)) == 5

    def test_concurrent_register(self, registry):
        def work(k):
            registry.register(ScoreMatrix(f"M{k}", "A", [[k]]))

        threads = [threading.Thread(target=work, args=(k,)) for k in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(registry) == 5 + 8
        assert all(f"M{k}" in registry for k in range(8))


class TestLoadFailure:
    @pytest.mark.parametrize("exc", [MatrixFileError("bad matrix"), OSError("no file")])
    def test_failed_matrix_isolated(self, exc, caplog):
        def loader(resource):
            if resource == PAM250_RESOURCE:
                raise exc
            return load_builtin_matrix(resource)

        with caplog.at_level(logging.ERROR, logger="pairscore.scoremodels.registry"):
            registry = ScoreModels(loader=loader)
        assert registry.pam250 is None
        assert "PAM250" not in registry
        assert registry.names() == ["BLOSUM62", "DNA", "PID", "Sequence Feature Similarity"]
        assert "Error reading score matrix pam250.scm" in caplog.text

    def test_all_matrices_fail(self):
        def loader(resource):
            raise MatrixFileError(resource)

        registry = ScoreModels(loader=loader)
        assert registry.names() == ["PID", "Sequence Feature Similarity"]
        assert registry.default_model(True) is None


def test_feature_model_without_features_scores_zero(registry):
    view = AlignmentView.from_strings(["ACD", "ACE"], features=FeatureSet())
    model = registry.lookup("Sequence Feature Similarity", view)
    assert model.find_distances(view, JALVIEW).total() == 0.0
