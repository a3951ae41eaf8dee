"""
Locus Lookup in a TRGT Repeat Catalog

Catalog lines carry the locus identifier as "ID=<id>;" in their info
column. The first line that contains the identifier wins. Turning that line
into a Locus (parsing motifs and structure, fetching flanks from the
reference) is done by a decoder supplied by the caller.
"""

import gzip
import logging
from pathlib import Path
from typing import Callable, Union

import pysam

from .errors import LocusNotFoundError
from .models import Locus

logger = logging.getLogger(__name__)

LocusDecoder = Callable[[int, "pysam.FastaFile", str], Locus]


def find_catalog_line(catalog_path: Union[str, Path], tr_id: str) -> str:
    """
    Find the catalog line of a locus.

    Args:
        catalog_path: Path to the catalog (supports .gz)
        tr_id: Locus identifier

    Returns:
        Matching line without the trailing newline

    Raises:
        LocusNotFoundError: If no line carries the identifier
    """
    catalog_path = str(catalog_path)
    query = f"ID={tr_id};"
    opener = gzip.open if catalog_path.endswith('.gz') else open

    with opener(catalog_path, 'rt') as f:
        for line in f:
            if query in line:
                return line.rstrip("\n")

    raise LocusNotFoundError(tr_id, f"Unable to find locus {tr_id}")


def get_locus(
    genome_path: Union[str, Path],
    catalog_path: Union[str, Path],
    tr_id: str,
    flank_len: int,
    decoder: LocusDecoder
) -> Locus:
    """
    Resolve a locus from the catalog and the reference genome.

    Args:
        genome_path: Path to the indexed reference FASTA
        catalog_path: Path to the repeat catalog
        tr_id: Locus identifier
        flank_len: Flank length to fetch on each side
        decoder: Builds the Locus from (flank_len, genome, catalog line)

    Raises:
        LocusNotFoundError: If the catalog has no such locus
    """
    line = find_catalog_line(catalog_path, tr_id)
    logger.debug(f"Catalog entry for {tr_id}: {line}")

    with pysam.FastaFile(str(genome_path)) as genome:
        return decoder(flank_len, genome, line)
