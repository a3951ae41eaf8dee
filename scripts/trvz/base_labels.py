"""
Base Label Dispatch

Per-base labels are produced by one of two labelers supplied by the caller:

- hmm:    structure-aware labeler for loci whose structure string describes
          nested or alternating repeats (contains '<')
- motifs: per-motif labeler driven by the decoded MS spans

Both return one label sequence per allele with one label per base. This
module only picks the labeler and checks the shape of what it returns.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from .errors import BaseLabelError
from .models import Locus, Span

logger = logging.getLogger(__name__)

NESTED_STRUCTURE_MARKER = "<"

BaseLabels = List[List[Any]]
HmmLabeler = Callable[[Locus, Sequence[str]], BaseLabels]
MotifLabeler = Callable[[Locus, Sequence[Optional[Sequence[Span]]], Sequence[str]], BaseLabels]


@dataclass(frozen=True)
class BaseLabelers:
    """The two labeling strategies available for a locus."""
    hmm: HmmLabeler
    motifs: MotifLabeler


def has_nested_structure(struc: str) -> bool:
    """
    Check whether a locus structure string describes nested repeats.

    Examples:
        >>> has_nested_structure("(CAG)n")
        False
        >>> has_nested_structure("<CAG>(CAA)n")
        True
    """
    return NESTED_STRUCTURE_MARKER in struc


def check_base_labels(labels_by_allele: Sequence[Sequence[Any]], allele_seqs: Sequence[str]) -> None:
    """
    Verify one label sequence per allele with one label per base.

    Raises:
        BaseLabelError: If the shape does not match the allele sequences
    """
    if len(labels_by_allele) != len(allele_seqs):
        raise BaseLabelError(
            f"Expected base labels for {len(allele_seqs)} alleles, got {len(labels_by_allele)}"
        )
    for index, (labels, seq) in enumerate(zip(labels_by_allele, allele_seqs)):
        if len(labels) != len(seq):
            raise BaseLabelError(
                f"Allele {index}: {len(labels)} base labels for a sequence of length {len(seq)}"
            )


def get_base_labels(
    locus: Locus,
    allele_seqs: Sequence[str],
    spans_by_allele: Sequence[Optional[Sequence[Span]]],
    labelers: BaseLabelers
) -> BaseLabels:
    """
    Label every base of every allele with the labeler suited to the locus.

    Args:
        locus: Locus being labeled
        allele_seqs: Allele sequences including flanks
        spans_by_allele: Decoded MS spans, one entry per allele
        labelers: Available labeling strategies

    Returns:
        One list of base labels per allele
    """
    if has_nested_structure(locus.struc):
        logger.debug(f"Locus {locus.id}: labeling bases with HMM ({locus.struc})")
        labels_by_allele = labelers.hmm(locus, allele_seqs)
    else:
        logger.debug(f"Locus {locus.id}: labeling bases with motif spans")
        labels_by_allele = labelers.motifs(locus, spans_by_allele, allele_seqs)

    check_base_labels(labels_by_allele, allele_seqs)
    return [list(labels) for labels in labels_by_allele]
