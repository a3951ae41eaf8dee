"""
Genotype Loading from TRGT Call Sets

Finds the record of a locus in a VCF/BCF file produced by TRGT and turns its
first sample's genotype into annotated alleles.

Fields consumed:
    INFO/TRID    locus identifier
    FORMAT/GT    called alleles (REF is index 0)
    FORMAT/MS    motif spans per called allele (see motif_spans)
    REF, ALT     repeat body sequence of each allele
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

import pysam

from .base_labels import BaseLabelers, get_base_labels
from .errors import IncompleteGenotypeError, LocusNotFoundError
from .models import Allele, Locus
from .motif_spans import decode_motif_spans
from .region_labels import build_flank_labels_by_allele, build_region_labels_by_allele

logger = logging.getLogger(__name__)


def _first_value(value: Any) -> Any:
    """Unwrap single-valued pysam fields that may come back as tuples."""
    if isinstance(value, (tuple, list)):
        return value[0] if value else None
    return value


def assemble_allele_seqs(
    locus: Locus,
    alleles: Sequence[str],
    genotype: Sequence[int]
) -> List[str]:
    """
    Build the full sequence of each called allele.

    Args:
        locus: Locus providing the flanks
        alleles: Record alleles, REF first then ALTs
        genotype: Called allele indices

    Returns:
        left flank + allele + right flank, one per called index

    Examples:
        With flanks "AA" / "TT", alleles ("CAG", "CAGCAG") and genotype (0, 1)
        the result is ['AACAGTT', 'AACAGCAGTT'].
    """
    return [locus.left_flank + alleles[index] + locus.right_flank for index in genotype]


def annotate_alleles(
    locus: Locus,
    allele_seqs: Sequence[str],
    ms_field: Optional[Union[str, Sequence[Optional[str]]]],
    labelers: BaseLabelers
) -> List[Allele]:
    """
    Build region, flank and base labels for assembled allele sequences.

    Args:
        locus: Locus the alleles belong to
        allele_seqs: Full allele sequences
        ms_field: FORMAT/MS value; None means no allele has motif spans
        labelers: Base labeling strategies

    Returns:
        One Allele per sequence, in the same order
    """
    if ms_field is None:
        spans_by_allele = [None] * len(allele_seqs)
    else:
        spans_by_allele = decode_motif_spans(ms_field)

    region_labels_by_allele = build_region_labels_by_allele(locus, allele_seqs, spans_by_allele)
    flank_labels_by_allele = build_flank_labels_by_allele(locus, region_labels_by_allele)
    base_labels_by_allele = get_base_labels(locus, allele_seqs, spans_by_allele, labelers)

    return [
        Allele(
            seq=seq,
            region_labels=region_labels,
            flank_labels=flank_labels,
            base_labels=base_labels,
        )
        for seq, region_labels, flank_labels, base_labels in zip(
            allele_seqs, region_labels_by_allele, flank_labels_by_allele, base_labels_by_allele
        )
    ]


def genotype_from_record(
    record: "pysam.VariantRecord",
    locus: Locus,
    labelers: BaseLabelers
) -> List[Allele]:
    """
    Annotate the alleles called in the first sample of a record.

    Raises:
        IncompleteGenotypeError: If any called allele is missing
    """
    if len(record.samples) == 0:
        raise IncompleteGenotypeError(locus.id)

    sample = record.samples[0]
    genotype = sample.get("GT")
    if not genotype or any(index is None for index in genotype):
        raise IncompleteGenotypeError(locus.id)

    allele_seqs = assemble_allele_seqs(locus, record.alleles, genotype)
    return annotate_alleles(locus, allele_seqs, sample.get("MS"), labelers)


def load_genotype(
    vcf_path: Union[str, Path],
    locus: Locus,
    labelers: BaseLabelers
) -> List[Allele]:
    """
    Load the annotated genotype of a locus from a TRGT VCF/BCF file.

    Records are scanned in file order and the first one whose TRID matches
    the locus is used.

    Args:
        vcf_path: Path to the VCF/BCF file
        locus: Locus to look up
        labelers: Base labeling strategies

    Returns:
        List of Allele in genotype call order

    Raises:
        LocusNotFoundError: If no record carries the locus TRID
        IncompleteGenotypeError: If the genotype has a missing allele
    """
    with pysam.VariantFile(str(vcf_path)) as vcf:
        for record in vcf:
            tr_id = _first_value(record.info.get("TRID"))
            if tr_id != locus.id:
                continue

            logger.info(f"Found TRID={tr_id} at {record.chrom}:{record.pos}")
            genotype = genotype_from_record(record, locus, labelers)
            logger.debug(
                f"TRID={tr_id}: allele lengths {[allele.length for allele in genotype]}"
            )
            return genotype

    raise LocusNotFoundError(locus.id)
