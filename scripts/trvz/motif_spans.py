"""
Motif Span (MS) Field Decoding

TRGT reports where each cataloged motif occurs inside the repeat body of
every called allele in the FORMAT/MS field.

MS Format:
    One entry per called allele, separated by commas. Each entry is either
    "." (no motif spans annotated) or an underscore-separated list of
    occurrences:

        <motif_index>(<start>-<end>)

    motif_index indexes into the locus motif list; start and end are 0-based,
    half-open and relative to the start of the repeat body (the left flank
    is not counted).

Example:
    "0(0-20)_0(25-45),1(0-12)"
        allele 0: motif 0 at [0, 20) and [25, 45)
        allele 1: motif 1 at [0, 12)
"""

import re
from typing import List, Optional, Sequence, Union

from .errors import MotifSpanDecodeError
from .models import Span

MISSING_SPANS = "."

_OCCURRENCE_RE = re.compile(r"([0-9]+)\(([0-9]+)-([0-9]+)\)")


def decode_span(occurrence: str) -> Span:
    """
    Decode a single motif occurrence.

    Args:
        occurrence: Text of the form "<index>(<start>-<end>)"

    Returns:
        Decoded Span

    Raises:
        MotifSpanDecodeError: If the text is not a well-formed occurrence

    Examples:
        >>> decode_span("2(10-16)")
        Span(index=2, start=10, end=16)
    """
    match = _OCCURRENCE_RE.fullmatch(occurrence)
    if match is None:
        raise MotifSpanDecodeError(f"Malformed motif span: {occurrence!r}")
    index, start, end = (int(group) for group in match.groups())
    return Span(index=index, start=start, end=end)


def decode_allele_spans(encoding: Optional[str]) -> Optional[List[Span]]:
    """
    Decode the motif spans of one allele.

    Occurrences are returned in the order they appear; no sorting, offset
    correction or gap filling is done here.

    Args:
        encoding: Per-allele MS entry. None is treated like "."

    Returns:
        List of Span, or None if the allele carries no motif spans

    Raises:
        MotifSpanDecodeError: If any occurrence is malformed

    Examples:
        >>> decode_allele_spans(".") is None
        True
        >>> decode_allele_spans("0(0-20)_0(25-45)")
        [Span(index=0, start=0, end=20), Span(index=0, start=25, end=45)]
    """
    if encoding is None or encoding == MISSING_SPANS:
        return None
    if not encoding:
        raise MotifSpanDecodeError("Empty motif span encoding")
    return [decode_span(occurrence) for occurrence in encoding.split("_")]


def split_ms_field(ms_field: Union[str, Sequence[Optional[str]], None]) -> List[str]:
    """
    Split an MS field into per-allele entries.

    pysam returns string FORMAT fields declared with Number=. either as a
    single comma-joined string or as a tuple of strings, with missing entries
    as None. Both forms are accepted.
    """
    if ms_field is None:
        return []
    if isinstance(ms_field, str):
        return ms_field.split(",")
    entries = []
    for entry in ms_field:
        if entry is None:
            entries.append(MISSING_SPANS)
        else:
            entries.extend(entry.split(","))
    return entries


def decode_motif_spans(
    ms_field: Union[str, Sequence[Optional[str]]]
) -> List[Optional[List[Span]]]:
    """
    Decode the MS field of one sample into spans per allele.

    Args:
        ms_field: Comma-separated MS value, or its per-allele entries

    Returns:
        One entry per allele: a list of Span, or None for "."

    Examples:
        >>> decode_motif_spans("0(0-4),.")
        [[Span(index=0, start=0, end=4)], None]
    """
    return [decode_allele_spans(entry) for entry in split_ms_field(ms_field)]


def encode_allele_spans(spans: Optional[Sequence[Span]]) -> str:
    """
    Encode the motif spans of one allele back into MS syntax.

    Examples:
        >>> encode_allele_spans([Span(0, 0, 20), Span(0, 25, 45)])
        '0(0-20)_0(25-45)'
        >>> encode_allele_spans(None)
        '.'
    """
    if spans is None:
        return MISSING_SPANS
    return "_".join(span.encode() for span in spans)


def encode_motif_spans(spans_by_allele: Sequence[Optional[Sequence[Span]]]) -> str:
    """Encode spans of all alleles into a comma-separated MS value."""
    return ",".join(encode_allele_spans(spans) for spans in spans_by_allele)
