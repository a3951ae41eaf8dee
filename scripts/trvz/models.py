"""
Data Model for Tandem Repeat Annotation

Records shared by the genotype loader, the read extractor and the label
builders. All coordinates are 0-based and half-open.

Region label kinds:
    Flank: flanking sequence on either side of the repeat
    Other: the repeat body as a single unannotated block
    Seq:   sequence between motif occurrences not attributed to any motif
    Tr:    one occurrence of a cataloged motif
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

FLANK = "Flank"
OTHER = "Other"
SEQ = "Seq"
TR = "Tr"

REGION_LABEL_KINDS: Tuple[str, ...] = (FLANK, OTHER, SEQ, TR)


@dataclass(frozen=True)
class Region:
    """Genomic range of a locus."""
    contig: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Locus:
    """Cataloged tandem repeat site with its flanking context."""
    id: str
    region: Region
    left_flank: str
    right_flank: str
    motifs: Tuple[str, ...]
    struc: str

    @property
    def left_flank_len(self) -> int:
        return len(self.left_flank)

    @property
    def right_flank_len(self) -> int:
        return len(self.right_flank)


@dataclass(frozen=True)
class Span:
    """One motif occurrence in locus-relative coordinates (before flank offset)."""
    index: int
    start: int
    end: int

    def encode(self) -> str:
        """
        Encode the span in the MS field syntax.

        Examples:
            >>> Span(0, 25, 45).encode()
            '0(25-45)'
        """
        return f"{self.index}({self.start}-{self.end})"


@dataclass(frozen=True)
class RegionLabel:
    """Labeled interval over full-allele coordinates."""
    kind: str  # 'Flank', 'Other', 'Seq', 'Tr'
    start: int
    end: int
    motif: Optional[str] = None  # only set for 'Tr'

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_flank(self) -> bool:
        return self.kind == FLANK

    @classmethod
    def flank(cls, start: int, end: int) -> "RegionLabel":
        return cls(FLANK, start, end)

    @classmethod
    def other(cls, start: int, end: int) -> "RegionLabel":
        return cls(OTHER, start, end)

    @classmethod
    def seq(cls, start: int, end: int) -> "RegionLabel":
        return cls(SEQ, start, end)

    @classmethod
    def tr(cls, start: int, end: int, motif: str) -> "RegionLabel":
        return cls(TR, start, end, motif)


@dataclass
class Allele:
    """One called haplotype with its annotations."""
    seq: str
    region_labels: List[RegionLabel]
    flank_labels: List[RegionLabel]
    base_labels: List[Any] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.seq)


@dataclass
class Read:
    """Annotation of one alignment record spanning a locus."""
    name: str
    seq: str
    left_flank: int  # flank bases retained on the left
    right_flank: int  # flank bases retained on the right
    allele: int  # allele-support index assigned by the genotyper
    meth: Optional[List[int]] = None  # per-base methylation probabilities
