"""Registry of named score models."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional

from pairscore.errors import PairscoreError
from pairscore.io import load_builtin_matrix
from pairscore.scoremodels.base import ScoreModel
from pairscore.scoremodels.feature_distance import FeatureDistanceModel
from pairscore.scoremodels.pid import PIDModel
from pairscore.scoremodels.score_matrix import ScoreMatrix

if TYPE_CHECKING:
    from pairscore.view import AlignmentView

logger = logging.getLogger(__name__)

BLOSUM62_RESOURCE = "blosum62.scm"
PAM250_RESOURCE = "pam250.scm"
DNA_RESOURCE = "dna.scm"

MatrixLoader = Callable[[str], ScoreMatrix]


class ScoreModels:
    """Ordered collection of score models, looked up by name.

    Holds the built-in models (BLOSUM62, PAM250, DNA, PID and sequence
    feature similarity) plus any registered later. Models keep the order in
    which their names were first registered.

    Registration and reset are serialised by a lock and publish a new
    mapping; lookups read the current mapping without locking.

    Example::

        models = ScoreModels()
        sm = models.lookup("BLOSUM62", view)
        distances = sm.find_distances(view, JALVIEW)
    """

    def __init__(self, loader: MatrixLoader = load_builtin_matrix):
        self._loader = loader
        self._lock = threading.Lock()
        self._models: Dict[str, ScoreModel] = {}
        self.blosum62: Optional[ScoreMatrix] = None
        self.pam250: Optional[ScoreMatrix] = None
        self.dna: Optional[ScoreMatrix] = None
        self.reset()

    def _load_matrix(self, resource: str) -> Optional[ScoreMatrix]:
        try:
            return self._loader(resource)
        except (PairscoreError, OSError) as exc:
            logger.error("Error reading score matrix %s: %s", resource, exc)
            return None

    def reset(self) -> None:
        """Discard registered models and reload the built-ins."""
        blosum62 = self._load_matrix(BLOSUM62_RESOURCE)
        pam250 = self._load_matrix(PAM250_RESOURCE)
        dna = self._load_matrix(DNA_RESOURCE)

        models: Dict[str, ScoreModel] = {}
        for model in (blosum62, pam250, dna, PIDModel(), FeatureDistanceModel()):
            if model is not None:
                models[model.name] = model

        with self._lock:
            self.blosum62 = blosum62
            self.pam250 = pam250
            self.dna = dna
            self._models = models

    def register(self, model: ScoreModel) -> None:
        """Add *model*, replacing (in place) any model with the same name."""
        with self._lock:
            models = dict(self._models)
            if model.name in models:
                logger.warning("Replacing score model %s", model.name)
            models[model.name] = model
            self._models = models

    def lookup(self, name: str, view: Optional["AlignmentView"] = None) -> Optional[ScoreModel]:
        """Return the model called *name* ready for *view*, or None."""
        model = self._models.get(name)
        if model is None:
            return None
        return model.bind_to_view(view)

    def default_model(self, for_peptide: bool) -> Optional[ScoreMatrix]:
        """BLOSUM62 for peptides, otherwise the DNA matrix."""
        return self.blosum62 if for_peptide else self.dna

    def models(self) -> Iterator[ScoreModel]:
        return iter(list(self._models.values()))

    def names(self) -> List[str]:
        return list(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __len__(self) -> int:
        return len(self._models)
