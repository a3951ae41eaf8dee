"""
Region and Flank Labels for Tandem Repeat Alleles

Every allele sequence is laid out as:

    [left flank][repeat body][right flank]
    0           L            A-R          A

where L and R are the flank lengths of the locus and A the allele length.

Region labels tile the whole allele. Motif spans decoded from the MS field
are shifted by L into allele coordinates; stretches of the repeat body not
covered by any span become Seq labels. Alleles without motif spans get a
single Other label for the body.

Flank labels are the coarse view: one Flank, one Other covering the whole
repeat body and one Flank, regardless of how detailed the region labels are.
"""

import logging
from typing import List, Optional, Sequence

from .errors import MotifSpanDecodeError, RegionLabelError
from .models import Locus, RegionLabel, Span

logger = logging.getLogger(__name__)


def check_region_labels(labels: Sequence[RegionLabel], allele_len: int) -> None:
    """
    Verify that labels are contiguous, ordered and cover [0, allele_len).

    Raises:
        RegionLabelError: If the labels leave a gap, overlap or run past the allele
    """
    cursor = 0
    for label in labels:
        if label.start != cursor:
            raise RegionLabelError(
                f"Region label {label.kind}({label.start}, {label.end}) "
                f"does not start at {cursor}"
            )
        if label.end < label.start:
            raise RegionLabelError(
                f"Region label {label.kind}({label.start}, {label.end}) has negative length"
            )
        cursor = label.end

    if cursor != allele_len:
        raise RegionLabelError(
            f"Region labels cover [0, {cursor}) but the allele has length {allele_len}"
        )


def build_region_labels(
    locus: Locus,
    allele_seq: str,
    spans: Optional[Sequence[Span]]
) -> List[RegionLabel]:
    """
    Build the full region label decomposition of one allele.

    Args:
        locus: Locus the allele belongs to
        allele_seq: Allele sequence including both flanks
        spans: Decoded motif spans of the allele, or None

    Returns:
        Ordered list of RegionLabel covering the allele

    Raises:
        MotifSpanDecodeError: If a span refers to an unknown motif
        RegionLabelError: If the spans do not fit inside the repeat body

    Examples:
        With 10 bp flanks, a 65 bp allele and spans "0(0-20)_0(25-45)":
            Flank(0, 10), Tr(10, 30), Seq(30, 35), Tr(35, 55), Flank(55, 65)
    """
    allele_len = len(allele_seq)
    tr_start = locus.left_flank_len
    tr_end = allele_len - locus.right_flank_len

    if spans is None:
        labels = [
            RegionLabel.flank(0, tr_start),
            RegionLabel.other(tr_start, tr_end),
            RegionLabel.flank(tr_end, allele_len),
        ]
        check_region_labels(labels, allele_len)
        return labels

    labels = [RegionLabel.flank(0, tr_start)]
    last_seg_end = tr_start
    for span in spans:
        if span.index >= len(locus.motifs):
            raise MotifSpanDecodeError(
                f"Motif index {span.index} out of range for locus {locus.id} "
                f"with {len(locus.motifs)} motifs"
            )
        start = span.start + tr_start
        end = span.end + tr_start

        if start != last_seg_end:
            labels.append(RegionLabel.seq(last_seg_end, start))
        labels.append(RegionLabel.tr(start, end, locus.motifs[span.index]))
        last_seg_end = end

    if last_seg_end != tr_end:
        labels.append(RegionLabel.seq(last_seg_end, tr_end))

    labels.append(RegionLabel.flank(tr_end, allele_len))
    check_region_labels(labels, allele_len)
    return labels


def build_region_labels_by_allele(
    locus: Locus,
    allele_seqs: Sequence[str],
    spans_by_allele: Sequence[Optional[Sequence[Span]]]
) -> List[List[RegionLabel]]:
    """
    Build region labels for every called allele.

    Raises:
        MotifSpanDecodeError: If the number of MS entries differs from the
            number of alleles
    """
    if len(spans_by_allele) != len(allele_seqs):
        raise MotifSpanDecodeError(
            f"Locus {locus.id}: MS field has {len(spans_by_allele)} entries "
            f"for {len(allele_seqs)} alleles"
        )

    logger.debug(f"Locus {locus.id}: building region labels for {len(allele_seqs)} alleles")
    return [
        build_region_labels(locus, seq, spans)
        for seq, spans in zip(allele_seqs, spans_by_allele)
    ]


def repeat_body_length(labels: Sequence[RegionLabel]) -> int:
    """Total length of all non-flank labels."""
    return sum(label.length for label in labels if not label.is_flank)


def build_flank_labels(locus: Locus, region_labels: Sequence[RegionLabel]) -> List[RegionLabel]:
    """
    Collapse region labels into Flank / Other / Flank.

    Examples:
        Region labels Flank(0, 10), Tr(10, 30), Seq(30, 35), Tr(35, 55),
        Flank(55, 65) collapse to Flank(0, 10), Other(10, 55), Flank(55, 65).
    """
    tr_start = locus.left_flank_len
    tr_end = tr_start + repeat_body_length(region_labels)
    allele_end = tr_end + locus.right_flank_len

    return [
        RegionLabel.flank(0, tr_start),
        RegionLabel.other(tr_start, tr_end),
        RegionLabel.flank(tr_end, allele_end),
    ]


def build_flank_labels_by_allele(
    locus: Locus,
    region_labels_by_allele: Sequence[Sequence[RegionLabel]]
) -> List[List[RegionLabel]]:
    """Build flank labels for every called allele."""
    return [build_flank_labels(locus, labels) for labels in region_labels_by_allele]
