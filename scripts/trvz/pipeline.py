"""
Per-locus annotation run: genotype and reads of one locus together.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from .base_labels import BaseLabelers
from .catalog import LocusDecoder, get_locus
from .genotype import load_genotype
from .models import Allele, Locus, Read
from .reads import DEFAULT_SEARCH_RADIUS, extract_reads

logger = logging.getLogger(__name__)


@dataclass
class LocusAnnotation:
    """Everything the renderer needs for one locus."""
    locus: Locus
    alleles: List[Allele]
    reads: List[Read]

    def reads_by_allele(self) -> Dict[int, List[Read]]:
        """Group reads by the allele they support."""
        by_allele: Dict[int, List[Read]] = {}
        for read in self.reads:
            by_allele.setdefault(read.allele, []).append(read)
        return by_allele


def annotate_locus(
    vcf_path: Union[str, Path],
    bam_path: Union[str, Path],
    locus: Locus,
    labelers: BaseLabelers,
    search_radius: int = DEFAULT_SEARCH_RADIUS
) -> LocusAnnotation:
    """Load the annotated genotype and the spanning reads of a locus."""
    alleles = load_genotype(vcf_path, locus, labelers)
    reads = extract_reads(bam_path, locus, search_radius)
    return LocusAnnotation(locus=locus, alleles=alleles, reads=reads)


def annotate_locus_from_config(
    config: Dict[str, Any],
    tr_id: str,
    decoder: LocusDecoder,
    labelers: BaseLabelers
) -> LocusAnnotation:
    """
    Resolve a locus and annotate it using the inputs of a loaded config.

    The config is expected to be merged with defaults (see
    utils.config_parser.merge_with_defaults).
    """
    inputs = config["inputs"]
    missing = [key for key in ("catalog", "genome", "vcf", "bam") if not inputs.get(key)]
    if missing:
        raise ValueError(f"Missing inputs in configuration: {', '.join(missing)}")

    locus = get_locus(
        inputs["genome"],
        inputs["catalog"],
        tr_id,
        config["locus"]["flank_len"],
        decoder,
    )
    logger.info(f"Resolved {tr_id} to {locus.region.contig}:{locus.region.start}-{locus.region.end}")

    return annotate_locus(
        inputs["vcf"],
        inputs["bam"],
        locus,
        labelers,
        search_radius=config["reads"]["search_radius"],
    )
