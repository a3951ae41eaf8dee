"""
Read Extraction from TRGT Spanning-Read BAMs

TRGT writes the reads spanning each genotyped locus with custom tags:

    TR  (Z)        locus identifier
    AL  (integer)  index of the allele the read supports
    FL  (B, uint)  [left, right] flank bases retained on the read
    MC  (B, uint8) per-base methylation probabilities, optional

Reads are fetched from a window around the locus that must include the
flanks TRGT wrote. TRGT flanks are assumed to be shorter than 1 kb, so the
default search radius is 1000.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import pysam

from .errors import TRGT_VERSION_HINT, MalformedTagError
from .models import Locus, Read

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_RADIUS = 1000

INTEGER_TAG_TYPES = frozenset("cCsSiI")
UNSIGNED_ARRAY_TYPECODES = frozenset("BHIL")


def _get_tag(alignment: "pysam.AlignedSegment", tag: str) -> Optional[Tuple[Any, str]]:
    """Return (value, value_type) of a tag, or None if the tag is absent."""
    try:
        return alignment.get_tag(tag, with_value_type=True)
    except KeyError:
        return None


def _is_array(value_type: str) -> bool:
    # pysam reports array tags as "B" followed by the subtype, e.g. "BI"
    return value_type.startswith("B")


def _is_unsigned_array(value: Any, value_type: str) -> bool:
    return _is_array(value_type) and getattr(value, "typecode", None) in UNSIGNED_ARRAY_TYPECODES


def read_from_alignment(alignment: "pysam.AlignedSegment", locus_id: str) -> Optional[Read]:
    """
    Validate the TRGT tags of one alignment and build its Read.

    Args:
        alignment: Alignment record
        locus_id: Identifier of the locus being extracted

    Returns:
        Read, or None if the alignment belongs to a different locus

    Raises:
        MalformedTagError: If TR, AL or FL is missing or malformed, or MC
            is present with an unexpected type
    """
    name = alignment.query_name

    tr_tag = _get_tag(alignment, "TR")
    if tr_tag is None or tr_tag[1] != "Z":
        raise MalformedTagError(
            name, "TR",
            f"Missing or malformed TR tag in read {name}. {TRGT_VERSION_HINT}"
        )
    if tr_tag[0] != locus_id:
        return None

    meth = None
    mc_tag = _get_tag(alignment, "MC")
    if mc_tag is not None:
        value, value_type = mc_tag
        if not _is_array(value_type) or getattr(value, "typecode", None) != "B":
            raise MalformedTagError(name, "MC", f"Malformed MC tag in read {name}.")
        if len(value) > 0:
            meth = list(value)

    al_tag = _get_tag(alignment, "AL")
    if al_tag is None:
        raise MalformedTagError(
            name, "AL",
            f"Malformed read. Expected AL tag not found: {name}. {TRGT_VERSION_HINT}"
        )
    if al_tag[1] not in INTEGER_TAG_TYPES:
        raise MalformedTagError(name, "AL", f"Malformed AL tag in read {name}.")

    fl_tag = _get_tag(alignment, "FL")
    if fl_tag is None:
        raise MalformedTagError(
            name, "FL",
            f"Malformed read. Expected FL tag not found: {name}. {TRGT_VERSION_HINT}"
        )
    if not _is_unsigned_array(*fl_tag):
        raise MalformedTagError(name, "FL", f"Malformed FL tag in read {name}.")
    if len(fl_tag[0]) != 2:
        raise MalformedTagError(
            name, "FL",
            f"Malformed FL tag in read {name}. Expected 2 values, found {len(fl_tag[0])}"
        )
    left_flank, right_flank = fl_tag[0]

    return Read(
        name=name,
        seq=alignment.query_sequence or "",
        left_flank=int(left_flank),
        right_flank=int(right_flank),
        allele=int(al_tag[0]),
        meth=meth,
    )


def search_window(locus: Locus, search_radius: int = DEFAULT_SEARCH_RADIUS) -> Tuple[str, int, int]:
    """
    Region to fetch reads from: the locus padded by search_radius on both sides.

    Examples:
        A locus at chr1:500-700 with radius 1000 gives ('chr1', 0, 1700).
    """
    start = max(0, locus.region.start - search_radius)
    end = locus.region.end + search_radius
    return locus.region.contig, start, end


def extract_reads(
    bam_path: Union[str, Path],
    locus: Locus,
    search_radius: int = DEFAULT_SEARCH_RADIUS
) -> List[Read]:
    """
    Extract the TRGT reads of a locus from an indexed BAM file.

    Args:
        bam_path: Path to the indexed BAM file
        locus: Locus to extract
        search_radius: Padding around the locus for the fetch

    Returns:
        List of Read in file order

    Raises:
        MalformedTagError: If any fetched alignment has malformed TRGT tags
    """
    contig, start, end = search_window(locus, search_radius)

    reads = []
    skipped = 0
    with pysam.AlignmentFile(str(bam_path), "rb") as bam:
        for alignment in bam.fetch(contig, start, end):
            read = read_from_alignment(alignment, locus.id)
            if read is None:
                skipped += 1
                continue
            reads.append(read)

    logger.info(
        f"TRID={locus.id}: {len(reads)} reads extracted from {contig}:{start}-{end} "
        f"({skipped} from other loci)"
    )
    return reads
