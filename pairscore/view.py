"""In-memory alignment views and feature data consumed by the score models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Set, Tuple, Union

import numpy as np

from pairscore.comparison import GAP_CHARS, is_gap
from pairscore.io import Sequence, read_fasta

# Residues counted towards the nucleotide guess
_NUCLEOTIDE_CHARS = set("ACGTUNX")
_NUCLEOTIDE_THRESHOLD = 0.85


def is_nucleotide_sequence(seqs: Iterable[str]) -> bool:
    """Guess whether *seqs* are nucleotide.

    True when more than 85% of the non-gap characters are A, C, G, T, U, N
    or X (case-insensitive).
    """
    na_count = 0
    aa_count = 0
    for seq in seqs:
        for c in seq:
            if is_gap(c):
                continue
            aa_count += 1
            if c.upper() in _NUCLEOTIDE_CHARS:
                na_count += 1
    if aa_count == 0:
        return False
    return na_count / aa_count > _NUCLEOTIDE_THRESHOLD


class FeatureSource(Protocol):
    """Supplies the displayed sequence feature types of an alignment view."""

    def displayed_feature_types(self) -> List[str]:
        ...

    def feature_types_at(self, sequence_name: str, position: int) -> Set[str]:
        ...


@dataclass(frozen=True)
class SequenceFeature:
    """A feature spanning residues ``begin..end`` (1-based, inclusive)."""

    type: str
    begin: int
    end: int

    def overlaps(self, position: int) -> bool:
        return self.begin <= position <= self.end


@dataclass
class FeatureSet:
    """Features per sequence name, with a set of displayed feature types.

    When *displayed* is None every feature type present is displayed.
    """

    features: Dict[str, List[SequenceFeature]] = field(default_factory=dict)
    displayed: Optional[Set[str]] = None

    def add(self, sequence_name: str, feature: SequenceFeature) -> None:
        self.features.setdefault(sequence_name, []).append(feature)

    def set_visible(self, feature_type: str, visible: bool = True) -> None:
        if self.displayed is None:
            self.displayed = set(self._all_types())
        if visible:
            self.displayed.add(feature_type)
        else:
            self.displayed.discard(feature_type)

    def _all_types(self) -> List[str]:
        seen: Dict[str, None] = {}
        for feats in self.features.values():
            for sf in feats:
                seen.setdefault(sf.type)
        return list(seen)

    def displayed_feature_types(self) -> List[str]:
        types = self._all_types()
        if self.displayed is None:
            return types
        return [t for t in types if t in self.displayed]

    def feature_types_at(self, sequence_name: str, position: int) -> Set[str]:
        shown = self.displayed
        return {
            sf.type
            for sf in self.features.get(sequence_name, [])
            if sf.overlaps(position) and (shown is None or sf.type in shown)
        }


@dataclass
class AlignmentView:
    """Aligned sequences as seen through one view.

    ``hidden_columns`` lists inclusive ``(start, end)`` column ranges that
    are hidden in the view. ``nucleotide`` is guessed from the residues
    when not given.
    """

    sequences: List[Sequence]
    hidden_columns: List[Tuple[int, int]] = field(default_factory=list)
    nucleotide: Optional[bool] = None
    features: Optional[FeatureSource] = None

    @classmethod
    def from_strings(cls, seqs: Iterable[str], **kwargs) -> "AlignmentView":
        sequences = [Sequence(f"seq{i + 1}", s) for i, s in enumerate(seqs)]
        return cls(sequences, **kwargs)

    @classmethod
    def from_fasta(cls, filepath: Union[str, Path], **kwargs) -> "AlignmentView":
        sequences = [Sequence(name, seq) for name, seq in read_fasta(filepath)]
        return cls(sequences, **kwargs)

    def __len__(self) -> int:
        return len(self.sequences)

    @property
    def width(self) -> int:
        return max((len(s.seq) for s in self.sequences), default=0)

    def is_nucleotide(self) -> bool:
        if self.nucleotide is not None:
            return self.nucleotide
        return is_nucleotide_sequence(s.seq for s in self.sequences)

    def get_sequence_strings(self, gap_char: str) -> List[str]:
        """Return the aligned strings with every gap character set to *gap_char*."""
        table = str.maketrans({g: gap_char for g in GAP_CHARS})
        return [s.seq.translate(table) for s in self.sequences]

    def visible_contigs(self) -> List[Tuple[int, int]]:
        """Inclusive ``(start, end)`` ranges of columns that are not hidden."""
        width = self.width
        contigs: List[Tuple[int, int]] = []
        start = 0
        for hide_start, hide_end in sorted(self.hidden_columns):
            if hide_start > start:
                contigs.append((start, min(hide_start, width) - 1))
            start = max(start, hide_end + 1)
            if start >= width:
                break
        if start < width:
            contigs.append((start, width - 1))
        return [(s, e) for s, e in contigs if s <= e]

    def find_position(self, seq_index: int, column: int) -> Optional[int]:
        """Residue position (1-based) at *column*, or None for a gap."""
        seq = self.sequences[seq_index].seq
        if column >= len(seq) or is_gap(seq[column]):
            return None
        return sum(1 for c in seq[: column + 1] if not is_gap(c))

    def residue_positions(self, seq_index: int) -> np.ndarray:
        """Residue position (1-based) at every column of a sequence, 0 where gapped."""
        seq = self.sequences[seq_index].seq
        residues = np.fromiter((not is_gap(c) for c in seq), dtype=bool, count=len(seq))
        return np.where(residues, np.cumsum(residues), 0)
