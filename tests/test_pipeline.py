"""
Tests for the per-locus annotation run.
"""

import sys
from pathlib import Path

import pytest

# Add scripts directory to path for imports
scripts_dir = Path(__file__).parent.parent / "scripts"
sys.path.insert(0, str(scripts_dir))

import pysam

from conftest import make_alignment

from trvz.pipeline import annotate_locus, annotate_locus_from_config
from utils.config_parser import merge_with_defaults


@pytest.fixture
def catalog_file(temp_dir):
    path = temp_dir / "catalog.bed"
    path.write_text("chr1\t1000\t1045\tID=LOC1;MOTIFS=CAG;STRUC=(CAG)n\n")
    return path


class FakeFastaFile:
    """Stands in for pysam.FastaFile."""

    def __init__(self, path):
        self.path = path

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


# ============================================================================
# Tests: Per-Locus Annotation
# ============================================================================

class TestAnnotateLocus:
    """Tests for annotate_locus function."""

    def test_alleles_and_reads(self, sample_vcf, sample_locus, labelers, fake_bam):
        fake_bam([
            make_alignment(name="r1", al=0),
            make_alignment(name="r2", al=1),
            make_alignment(name="r3", al=1),
        ])
        annotation = annotate_locus(sample_vcf, "sample.bam", sample_locus, labelers)

        assert len(annotation.alleles) == 2
        assert len(annotation.reads) == 3
        by_allele = annotation.reads_by_allele()
        assert [read.name for read in by_allele[1]] == ["r2", "r3"]


class TestAnnotateLocusFromConfig:
    """Tests for annotate_locus_from_config function."""

    def test_from_config(self, sample_vcf, sample_locus, catalog_file, labelers, fake_bam, monkeypatch):
        """Inputs, flank length and search radius come from the config."""
        opened = fake_bam([make_alignment(name="r1")])
        monkeypatch.setattr(pysam, "FastaFile", FakeFastaFile)
        config = merge_with_defaults({
            "inputs": {
                "catalog": str(catalog_file),
                "genome": "genome.fa",
                "vcf": str(sample_vcf),
                "bam": "sample.bam",
            },
            "locus": {"flank_len": 10},
            "reads": {"search_radius": 100},
        })
        flank_lens = []

        def decoder(flank_len, genome, line):
            flank_lens.append(flank_len)
            return sample_locus

        annotation = annotate_locus_from_config(config, "LOC1", decoder, labelers)

        assert flank_lens == [10]
        assert annotation.locus is sample_locus
        assert [read.name for read in annotation.reads] == ["r1"]
        assert opened[0].fetched == [("chr1", 900, 1145)]

    def test_missing_inputs(self, labelers):
        config = merge_with_defaults({})
        with pytest.raises(ValueError, match="catalog"):
            annotate_locus_from_config(config, "LOC1", lambda *args: None, labelers)
