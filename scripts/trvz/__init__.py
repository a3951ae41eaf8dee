"""
TRVZ - Tandem Repeat Genotype Annotation Core

Reusable functions behind the tandem repeat visualizer:
- Decoding TRGT motif span (MS) annotations
- Region and flank label decomposition of called alleles
- Genotype loading from TRGT VCFs and read extraction from TRGT BAMs
"""

from .models import (
    Region,
    Locus,
    Span,
    RegionLabel,
    Allele,
    Read,
)

from .errors import (
    TrvzError,
    LocusNotFoundError,
    IncompleteGenotypeError,
    MalformedTagError,
    MotifSpanDecodeError,
    RegionLabelError,
    BaseLabelError,
)

from .motif_spans import (
    decode_allele_spans,
    decode_motif_spans,
    encode_allele_spans,
)

from .region_labels import (
    build_region_labels,
    build_flank_labels,
    check_region_labels,
)

from .base_labels import (
    BaseLabelers,
    has_nested_structure,
    get_base_labels,
)

from .genotype import load_genotype
from .reads import extract_reads, read_from_alignment, DEFAULT_SEARCH_RADIUS
from .catalog import find_catalog_line, get_locus
from .pipeline import LocusAnnotation, annotate_locus, annotate_locus_from_config

__version__ = "0.1.0"

__all__ = [
    # Models
    "Region",
    "Locus",
    "Span",
    "RegionLabel",
    "Allele",
    "Read",
    # Errors
    "TrvzError",
    "LocusNotFoundError",
    "IncompleteGenotypeError",
    "MalformedTagError",
    "MotifSpanDecodeError",
    "RegionLabelError",
    "BaseLabelError",
    # Motif spans
    "decode_allele_spans",
    "decode_motif_spans",
    "encode_allele_spans",
    # Labels
    "build_region_labels",
    "build_flank_labels",
    "check_region_labels",
    "BaseLabelers",
    "has_nested_structure",
    "get_base_labels",
    # Loaders
    "load_genotype",
    "extract_reads",
    "read_from_alignment",
    "DEFAULT_SEARCH_RADIUS",
    "find_catalog_line",
    "get_locus",
    "LocusAnnotation",
    "annotate_locus",
    "annotate_locus_from_config",
]
