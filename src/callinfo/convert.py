"""
adapters from the pysam read and variant records to the callinfo types
"""
from typing import Optional

import pysam
from pysam.libcbcf import VariantRecord

from .annotation import AnnotationRecord
from .constants import FILTER, NO_LOG10_PERROR
from .interval import Locatable
from .util import logger


class ReadLocus(Locatable):
    """
    the aligned span of a read. Unmapped reads have no contig
    """

    def __init__(self, read: pysam.AlignedSegment):
        self.read = read

    @property
    def contig(self) -> Optional[str]:
        if self.read.is_unmapped:
            return None
        return self.read.reference_name

    @property
    def start(self) -> int:
        """pysam positions are 0-based"""
        return self.read.reference_start + 1

    @property
    def end(self) -> int:
        """pysam reference_end is 0-based exclusive which is the same as 1-based inclusive"""
        return self.read.reference_end

    def __repr__(self):
        return '{}({}:{}-{} {})'.format(
            self.__class__.__name__, self.contig, self.start, self.end, self.read.query_name
        )


class VariantLocus(Locatable):
    """
    the reference span of a VCF record, from POS to the end of the reference allele (or INFO/END)
    """

    def __init__(self, record: VariantRecord):
        self.record = record

    @property
    def contig(self) -> Optional[str]:
        return self.record.chrom

    @property
    def start(self) -> int:
        return self.record.pos

    @property
    def end(self) -> int:
        return self.record.stop

    def __repr__(self):
        return '{}({}:{}-{} {})'.format(
            self.__class__.__name__, self.contig, self.start, self.end, self.record.id
        )


def as_locatable(obj) -> Locatable:
    """
    wrap the pysam records in their Locatable adapter. Objects which already have contig, start
    and end are returned as is

    Raises:
        TypeError: the object cannot be placed on a reference sequence
    """
    if isinstance(obj, pysam.AlignedSegment):
        return ReadLocus(obj)
    elif isinstance(obj, VariantRecord):
        return VariantLocus(obj)
    elif all([hasattr(obj, attr) for attr in ['contig', 'start', 'end']]):
        return obj
    raise TypeError('object does not have a position on a reference sequence', obj)


def annotation_from_variant(record: VariantRecord) -> AnnotationRecord:
    """
    collect the ID, QUAL, FILTER and INFO of a VCF record

    QUAL is converted to the log10 error probability. A missing or negative QUAL has no error
    estimate. A FILTER of PASS becomes an empty filter set and a missing FILTER becomes None (not
    evaluated)
    """
    qual = record.qual
    if qual is not None and qual < 0:
        logger.warning(f'{record.chrom}:{record.pos} negative QUAL ({qual}) treated as missing')
        qual = None
    log10_p_error = NO_LOG10_PERROR if qual is None else qual / -10.0

    filter_names = list(record.filter.keys())
    if not filter_names:
        filters = None
    elif filter_names == [FILTER.PASS]:
        filters = set()
    else:
        filters = set(filter_names)

    attributes = dict(record.info.items())
    logger.debug(
        f'{record.chrom}:{record.pos} qual={qual} filters={filter_names} info keys={sorted(attributes)}'
    )
    return AnnotationRecord(record.id, log10_p_error, filters, attributes)
