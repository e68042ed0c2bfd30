"""Gap-treatment parameters for pairwise similarity and identity scoring."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Dict

from pairscore.errors import ConfigurationError


@dataclass(frozen=True)
class SimilarityParams:
    """How gaps are treated when two aligned sequences are compared.

    Attributes:
        include_gapped_columns: score columns where both sequences are gapped
        match_gaps: count a gap against a residue as a match (identity only)
        include_gaps: include gap-residue columns in the sum / denominator
        denominate_by_shortest_length: stop at the end of the shorter
            sequence; when False the overhang is treated as trailing gaps
    """

    include_gapped_columns: bool
    match_gaps: bool
    include_gaps: bool
    denominate_by_shortest_length: bool

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"Similarity parameter '{f.name}' must be a bool, got: {value!r}"
                )


# Gaps count everywhere and gap-residue is a match
JALVIEW = SimilarityParams(True, True, True, True)

# As JALVIEW, but gap-residue is a mismatch
SEQ_SPACE = SimilarityParams(True, False, True, True)

# Raghava & Barton (2006) percent identity variants
PID1 = SimilarityParams(False, False, True, False)
PID2 = SimilarityParams(False, False, False, False)
PID3 = SimilarityParams(False, False, False, True)
PID4 = SimilarityParams(False, False, True, True)

PRESETS: Dict[str, SimilarityParams] = {
    "Jalview": JALVIEW,
    "SeqSpace": SEQ_SPACE,
    "PID1": PID1,
    "PID2": PID2,
    "PID3": PID3,
    "PID4": PID4,
}


def from_name(name: str) -> SimilarityParams:
    """Look up a preset by name (case-insensitive)."""
    for key, params in PRESETS.items():
        if key.lower() == name.lower():
            return params
    raise ConfigurationError(
        f"Unknown similarity preset {name!r}; expected one of {', '.join(PRESETS)}"
    )
