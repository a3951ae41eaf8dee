"""Exceptions raised while loading tandem repeat genotypes and reads."""

from typing import Optional

TRGT_VERSION_HINT = "Was this BAM file generated by the latest version of TRGT?"


class TrvzError(Exception):
    """Base class for all errors raised by this package."""


class LocusNotFoundError(TrvzError, LookupError):
    """Locus identifier absent from the catalog or the variant file."""

    def __init__(self, tr_id: str, message: Optional[str] = None):
        self.tr_id = tr_id
        super().__init__(message or f"TRID={tr_id} missing")


class IncompleteGenotypeError(TrvzError):
    """A called allele of the locus is missing."""

    def __init__(self, tr_id: str):
        self.tr_id = tr_id
        super().__init__(f"TRID={tr_id} misses genotyping")


class MalformedTagError(TrvzError, ValueError):
    """Required alignment tag is absent or has an unexpected type or shape."""

    def __init__(self, read_name: str, tag: str, message: str):
        self.read_name = read_name
        self.tag = tag
        super().__init__(message)


class MotifSpanDecodeError(TrvzError, ValueError):
    """The MS motif span encoding could not be parsed."""


class RegionLabelError(TrvzError, ValueError):
    """Region labels do not tile the allele."""


class BaseLabelError(TrvzError, ValueError):
    """A base labeler returned output of the wrong shape."""
