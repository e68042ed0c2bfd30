"""Gap characters and the column-inclusion rule shared by pairwise scorers."""

from __future__ import annotations

from typing import Iterator, Tuple

from pairscore.params import SimilarityParams

GAP_SPACE = " "
GAP_DOT = "."
GAP_DASH = "-"
GAP_CHARS = GAP_SPACE + GAP_DOT + GAP_DASH


def is_gap(c: str) -> bool:
    """Return True if *c* is one of the recognised gap characters."""
    return c == GAP_DASH or c == GAP_DOT or c == GAP_SPACE


def iter_scored_columns(
    seq1: str, seq2: str, params: SimilarityParams
) -> Iterator[Tuple[str, str, bool, bool]]:
    """Yield ``(c1, c2, gap1, gap2)`` for each column that *params* includes.

    Columns are walked up to the longer sequence. Past the end of the
    shorter one we either stop (``denominate_by_shortest_length``) or
    treat the missing residue as a gap. Gap-gap columns are kept only with
    ``include_gapped_columns`` and gap-residue columns only with
    ``include_gaps``; residue-residue columns are always kept.
    """
    len1 = len(seq1)
    len2 = len(seq2)
    for i in range(max(len1, len2)):
        if i >= len1 or i >= len2:
            if params.denominate_by_shortest_length:
                return
        c1 = seq1[i] if i < len1 else GAP_DASH
        c2 = seq2[i] if i < len2 else GAP_DASH
        gap1 = is_gap(c1)
        gap2 = is_gap(c2)

        if gap1 and gap2:
            if not params.include_gapped_columns:
                continue
        elif gap1 or gap2:
            if not params.include_gaps:
                continue

        yield c1, c2, gap1, gap2
