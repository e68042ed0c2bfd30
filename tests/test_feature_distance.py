"""Tests for the sequence feature distance model."""

import time

import pytest

from pairscore import params
from pairscore.io import Sequence
from pairscore.params import SimilarityParams
from pairscore.scoremodels.feature_distance import FeatureDistanceModel
from pairscore.view import AlignmentView, FeatureSet, SequenceFeature


@pytest.fixture
def ferredoxin_view():
    """Four ungapped sequences of width 5.

    a: sf1 at residue 3
    b: sf1 at residue 3, sf2 at residues 4-5
    c: sf1 at residue 3
    d: sf3 at residues 4-5
    """
    features = FeatureSet()
    features.add("a", SequenceFeature("sf1", 3, 3))
    features.add("b", SequenceFeature("sf1", 3, 3))
    features.add("b", SequenceFeature("sf2", 4, 5))
    features.add("c", SequenceFeature("sf1", 3, 3))
    features.add("d", SequenceFeature("sf3", 4, 5))
    seqs = [Sequence(n, s) for n, s in zip("abcd", ["DVYIL", "DVYIL", "DVYVL", "DVYIL"])]
    return AlignmentView(seqs, features=features)


def _bound(view):
    return FeatureDistanceModel().bind_to_view(view)


class TestFindDistances:
    def test_identical_features_zero_distance(self, ferredoxin_view):
        dm = _bound(ferredoxin_view).find_distances(ferredoxin_view, params.JALVIEW)
        assert dm.get_value(0, 2) == 0.0
        assert dm.get_value(0, 1) > dm.get_value(0, 2)
        # sf2 on two of five columns
        assert dm.get_value(0, 1) == pytest.approx(2 / 5)
        assert dm.get_value(1, 0) == dm.get_value(0, 1)

    def test_hiding_columns_changes_distances(self, ferredoxin_view):
        ferredoxin_view.hidden_columns = [(3, 4)]
        dm = _bound(ferredoxin_view).find_distances(ferredoxin_view, params.JALVIEW)
        assert dm.get_value(0, 1) == 0.0
        assert dm.get_value(0, 2) == 0.0
        for s in range(3):
            # normalised by the three visible columns
            assert dm.get_value(s, 3) == pytest.approx(1 / 3)

    def test_hidden_first_columns(self, ferredoxin_view):
        ferredoxin_view.hidden_columns = [(0, 1)]
        dm = _bound(ferredoxin_view).find_distances(ferredoxin_view, params.JALVIEW)
        assert dm.get_value(0, 2) == 0.0
        assert dm.get_value(0, 1) == pytest.approx(2 / 3)

    def test_gap_policy(self, feature_view):
        model = _bound(feature_view)
        distances = model.find_distances(feature_view, SimilarityParams(True, True, True, True))
        assert distances.get_value(0, 0) == 0.0
        assert distances.get_value(1, 1) == 0.0
        assert distances.get_value(0, 1) == pytest.approx(13 / 6)
        assert distances.get_value(1, 0) == pytest.approx(13 / 6)

        distances = model.find_distances(feature_view, SimilarityParams(True, True, False, True))
        assert distances.get_value(0, 1) == pytest.approx(6 / 6)

    def test_shared_types_on_overlapping_ranges(self):
        features = FeatureSet()
        features.add("s1", SequenceFeature("domain", 1, 3))
        features.add("s1", SequenceFeature("variant", 2, 4))
        features.add("s1", SequenceFeature("variant", 3, 5))
        features.add("s2", SequenceFeature("domain", 2, 4))
        features.add("s2", SequenceFeature("variant", 1, 2))
        features.add("s2", SequenceFeature("variant", 5, 5))
        view = AlignmentView([Sequence("s1", "ABCDE"), Sequence("s2", "ABCDE")], features=features)
        distances = _bound(view).find_distances(view, params.JALVIEW)
        assert distances.height == 2
        assert distances.get_value(0, 0) == 0.0
        # 2 + 0 + 1 + 2 + 0 differences over five columns
        assert distances.get_value(0, 1) == pytest.approx(1.0)
        assert distances.get_value(1, 0) == pytest.approx(1.0)

    def test_hidden_feature_type_ignored(self, ferredoxin_view):
        ferredoxin_view.features.set_visible("sf2", False)
        dm = _bound(ferredoxin_view).find_distances(ferredoxin_view, params.JALVIEW)
        assert dm.get_value(0, 1) == 0.0


class TestNoFeatures:
    def test_no_displayed_types(self):
        view = AlignmentView.from_strings(["ACGT", "TTTT", "A-GT"], features=FeatureSet())
        dm = _bound(view).find_distances(view, params.JALVIEW)
        assert dm.height == 3
        assert dm.total() == 0.0

    def test_unbound_model(self, ferredoxin_view):
        dm = FeatureDistanceModel().find_distances(ferredoxin_view, params.JALVIEW)
        assert dm.height == 4
        assert dm.total() == 0.0


class TestBinding:
    def test_bind_creates_new_instance(self, ferredoxin_view, feature_view):
        model = FeatureDistanceModel()
        bound1 = model.bind_to_view(ferredoxin_view)
        bound2 = model.bind_to_view(feature_view)
        assert bound1 is not model
        assert bound1 is not bound2
        assert bound1.features is ferredoxin_view.features
        assert bound2.features is feature_view.features
        assert FeatureDistanceModel.view_dependent

    def test_similarities_derived(self, ferredoxin_view):
        model = _bound(ferredoxin_view)
        dm = model.find_distances(ferredoxin_view, params.JALVIEW)
        sm = model.find_similarities(ferredoxin_view, params.JALVIEW)
        lo, hi = dm.find_min_max()
        assert sm.get_value(0, 1) == pytest.approx(lo + hi - dm.get_value(0, 1))


def _wide_view(n_seqs, width):
    features = FeatureSet()
    seqs = []
    for k in range(n_seqs):
        name = f"s{k}"
        seq = "".join("-" if (col + k) % 7 == 0 else "ACDEFGHIKL"[col % 10] for col in range(width))
        seqs.append(Sequence(name, seq))
        for begin in range(1, width, 50):
            features.add(name, SequenceFeature(f"type{(begin + k) % 3}", begin, begin + 20))
    return AlignmentView(seqs, features=features)


class TestWideAlignments:
    def test_column_types_use_precomputed_positions(self):
        view = _wide_view(3, 120)
        model = _bound(view)
        positions = [view.residue_positions(i) for i in range(3)]
        for column in (0, 7, 60, 119):
            assert model.find_feature_types_at_column(view, column, positions) == \
                model.find_feature_types_at_column(view, column)

    def test_ragged_sequences(self):
        features = FeatureSet()
        features.add("a", SequenceFeature("chain", 1, 6))
        features.add("b", SequenceFeature("chain", 1, 2))
        view = AlignmentView([Sequence("a", "ACDEFG"), Sequence("b", "AC")], features=features)
        model = _bound(view)
        assert model.find_feature_types_at_column(view, 4) == [{"chain"}, None]
        dm = model.find_distances(view, params.JALVIEW)
        # four columns past the end of b count as gaps
        assert dm.get_value(0, 1) == pytest.approx(4 / 6)

    def test_time_grows_linearly_with_width(self):
        def best_time(width):
            view = _wide_view(10, width)
            model = _bound(view)
            timings = []
            for _ in range(3):
                start = time.perf_counter()
                model.find_distances(view, params.JALVIEW)
                timings.append(time.perf_counter() - start)
            return min(timings)

        narrow = best_time(500)
        wide = best_time(2000)
        assert wide / narrow < 8
