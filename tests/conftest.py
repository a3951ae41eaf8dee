"""
Pytest configuration and fixtures for TRVZ tests.
"""

import array
import sys
import tempfile
from pathlib import Path

import pytest

# Add scripts directory to path for imports
scripts_dir = Path(__file__).parent.parent / "scripts"
sys.path.insert(0, str(scripts_dir))

import pysam

from trvz.base_labels import BaseLabelers
from trvz.models import Locus, Region


# ============================================================================
# Path Fixtures
# ============================================================================

@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================================
# Locus Fixtures
# ============================================================================

LEFT_FLANK = "GATTACAGAT"   # 10 bp
RIGHT_FLANK = "TTGACCATGA"  # 10 bp

# Repeat body annotated as 0(0-20)_0(25-45): two CAG runs split by an interruption
BODY_WITH_INTERRUPTION = "CAGCAGCAGCAGCAGCAGCA" + "TTTTT" + "CAGCAGCAGCAGCAGCAGCA"
SHORT_BODY = "CAGCAGCAGCAGCAGCAGCA"  # 20 bp, MS "."


@pytest.fixture
def sample_locus():
    """Locus with 10 bp flanks and a single CAG motif."""
    return Locus(
        id="LOC1",
        region=Region("chr1", 1000, 1045),
        left_flank=LEFT_FLANK,
        right_flank=RIGHT_FLANK,
        motifs=("CAG",),
        struc="(CAG)n",
    )


@pytest.fixture
def nested_locus():
    """Locus whose structure describes nested repeats."""
    return Locus(
        id="NESTED1",
        region=Region("chr2", 5000, 5060),
        left_flank=LEFT_FLANK,
        right_flank=RIGHT_FLANK,
        motifs=("CAG", "CCG"),
        struc="<(CAG)n(CCG)n>",
    )


# ============================================================================
# Labeler Fixtures
# ============================================================================

class RecordingLabelers:
    """Fake base labelers that remember how they were called."""

    def __init__(self):
        self.calls = []

    def hmm(self, locus, allele_seqs):
        self.calls.append(("hmm", locus.id, list(allele_seqs)))
        return [["H"] * len(seq) for seq in allele_seqs]

    def motifs(self, locus, spans_by_allele, allele_seqs):
        self.calls.append(("motifs", locus.id, list(spans_by_allele)))
        return [["M"] * len(seq) for seq in allele_seqs]

    def as_labelers(self):
        return BaseLabelers(hmm=self.hmm, motifs=self.motifs)


@pytest.fixture
def recording_labelers():
    """Labelers that return 'H' or 'M' for every base."""
    return RecordingLabelers()


@pytest.fixture
def labelers(recording_labelers):
    return recording_labelers.as_labelers()


# ============================================================================
# VCF Fixtures
# ============================================================================

VCF_HEADER = """\
##fileformat=VCFv4.2
##contig=<ID=chr1,length=100000>
##contig=<ID=chr2,length=100000>
##INFO=<ID=TRID,Number=1,Type=String,Description="Tandem repeat ID">
##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">
##FORMAT=<ID=MS,Number=.,Type=String,Description="Motif spans">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\tSAMPLE1
"""


def vcf_line(chrom, pos, ref, alt, tr_id, gt, ms):
    """Build one tab-separated VCF record line."""
    return "\t".join([chrom, str(pos), ".", ref, alt, ".", "PASS", f"TRID={tr_id}", "GT:MS", f"{gt}:{ms}"]) + "\n"


@pytest.fixture
def write_vcf(temp_dir):
    """Factory fixture writing VCF records to a temporary file."""
    def _write_vcf(lines, name="calls.vcf"):
        vcf_path = temp_dir / name
        vcf_path.write_text(VCF_HEADER + "".join(lines))
        return vcf_path
    return _write_vcf


@pytest.fixture
def sample_vcf(write_vcf):
    """
    VCF with three loci:
        OTHER   - homozygous reference, not queried
        LOC1    - 0/1, REF annotated 0(0-20)_0(25-45), ALT unannotated
        NOCALL  - ./.
    """
    return write_vcf([
        vcf_line("chr1", 501, "CAGCAG", "CAG", "OTHER", "0/0", "0(0-6),0(0-6)"),
        vcf_line("chr1", 1001, BODY_WITH_INTERRUPTION, SHORT_BODY, "LOC1", "0/1", "0(0-20)_0(25-45),."),
        vcf_line("chr1", 3001, "CAGCAG", "CAG", "NOCALL", "./.", "."),
    ])


# ============================================================================
# Alignment Fixtures
# ============================================================================

def make_alignment(name="read1", seq="ACGTACGTAC", tr="LOC1", al=0, fl=(10, 10), mc=None, header=None):
    """
    Build an in-memory alignment carrying TRGT tags.

    Passing None for tr, al or fl leaves the tag out. A header is only needed
    when the alignment is written to a BAM file.
    """
    alignment = pysam.AlignedSegment(header)
    alignment.query_name = name
    alignment.query_sequence = seq
    if tr is not None:
        alignment.set_tag("TR", tr, "Z")
    if al is not None:
        alignment.set_tag("AL", al, "i")
    if fl is not None:
        alignment.set_tag("FL", array.array("I", fl))
    if mc is not None:
        alignment.set_tag("MC", array.array("B", mc))
    return alignment


class FakeAlignmentFile:
    """Stands in for pysam.AlignmentFile, serving a fixed list of alignments."""

    opened = []

    def __init__(self, path, mode="rb", alignments=()):
        self.path = path
        self.mode = mode
        self.alignments = list(alignments)
        self.fetched = []
        self.closed = False
        FakeAlignmentFile.opened.append(self)

    def fetch(self, contig, start, stop):
        self.fetched.append((contig, start, stop))
        return iter(self.alignments)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


@pytest.fixture
def fake_bam(monkeypatch):
    """
    Factory fixture patching pysam.AlignmentFile to serve the given alignments.

    Returns the list of opened fake files so tests can inspect fetch windows.
    """
    def _fake_bam(alignments):
        FakeAlignmentFile.opened = []

        def _open(path, mode="rb"):
            return FakeAlignmentFile(path, mode, alignments)

        monkeypatch.setattr(pysam, "AlignmentFile", _open)
        return FakeAlignmentFile.opened
    return _fake_bam


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config():
    """Provide a sample configuration dictionary."""
    return {
        "inputs": {
            "catalog": "/path/to/catalog.bed",
            "genome": "/path/to/genome.fa",
            "vcf": "/path/to/sample.vcf.gz",
            "bam": "/path/to/sample.spanning.bam",
        },
        "locus": {
            "flank_len": 10,
        },
        "reads": {
            "search_radius": 500,
        },
        "logging": {
            "level": "DEBUG",
            "file": None,
        },
    }
