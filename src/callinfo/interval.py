"""
the contract for anything with a single mapping onto a reference sequence

positions are 1-based and closed at both ends. A contig of None means the object is not
mapped and its start/end are undefined
"""
import re
from typing import Dict, Optional

from .error import InvalidArgumentError

MAX_POSITION: int = 2 ** 31 - 1
"""end used for a region given only by its contig name"""


def size(locus) -> int:
    """
    number of bases covered by an interval

    Example:
        >>> size(GenomicInterval('1', 1, 11))
        11
    """
    return locus.end - locus.start + 1


def ga4gh_start(locus) -> int:
    """the 0-based start position (GA4GH convention)"""
    return locus.start - 1


def ga4gh_end(locus) -> int:
    """the end of the 0-based half-open span, [ga4gh_start, ga4gh_end)"""
    return locus.end


def overlaps_with_margin(first, other, margin: int = 0) -> bool:
    """
    checks if the first interval comes within margin bases of overlapping the other. A negative
    margin shrinks the test

    Args:
        first: the interval to compare from
        other: the interval to compare to
        margin: how many bases may be between the two intervals for them to still overlap

    Example:
        >>> overlaps_with_margin(GenomicInterval('1', 1, 4), GenomicInterval('1', 5, 7), 1)
        True
    """
    if other is None or other.contig is None or first.contig is None:
        return False
    return (
        first.contig == other.contig
        and first.start <= other.end + margin
        and other.start - margin <= first.end
    )


def overlaps(first, other) -> bool:
    """
    checks if two intervals have any position in common

    Example:
        >>> overlaps(GenomicInterval('1', 1, 4), GenomicInterval('1', 5, 7))
        False
        >>> overlaps(GenomicInterval('1', 1, 10), GenomicInterval('1', 10, 11))
        True
    """
    return overlaps_with_margin(first, other, 0)


def contains(first, other) -> bool:
    """
    checks if the first interval covers every position of the other

    Example:
        >>> contains(GenomicInterval('1', 1, 10), GenomicInterval('1', 2, 5))
        True
        >>> contains(GenomicInterval('1', 2, 5), GenomicInterval('1', 1, 10))
        False
    """
    if other is None or other.contig is None or first.contig is None:
        return False
    return first.contig == other.contig and first.start <= other.start and first.end >= other.end


class Locatable:
    """
    mixin exposing the interval functions of this module as methods for any class which defines
    contig, start and end

    Example:
        >>> GenomicInterval('1', 1, 10).overlaps(GenomicInterval('1', 10, 11))
        True
    """

    contig: Optional[str]
    start: int
    end: int

    def size(self) -> int:
        return size(self)

    def ga4gh_start(self) -> int:
        return ga4gh_start(self)

    def ga4gh_end(self) -> int:
        return ga4gh_end(self)

    def overlaps(self, other) -> bool:
        return overlaps(self, other)

    def overlaps_with_margin(self, other, margin: int = 0) -> bool:
        return overlaps_with_margin(self, other, margin)

    def contains(self, other) -> bool:
        return contains(self, other)


class GenomicInterval(Locatable):
    """
    a plain region on a reference sequence
    """

    def __init__(self, contig: Optional[str], start: int, end: Optional[int] = None):
        """
        Args:
            contig: the reference sequence name, None for an unmapped interval
            start: the start position (inclusive)
            end: the end position (inclusive), defaults to the start

        Raises:
            InvalidArgumentError: the end comes before the start on a mapped interval
        """
        self.contig = contig
        self.start = int(start)
        self.end = int(end) if end is not None else self.start
        if self.contig is not None and self.end < self.start:
            raise InvalidArgumentError('interval start > end is not allowed', self.start, self.end)

    @classmethod
    def parse(cls, region: str) -> 'GenomicInterval':
        """
        parse a region string

        Example:
            >>> GenomicInterval.parse('chr1:1,000-2,000')
            GenomicInterval(chr1:1000-2000)
            >>> GenomicInterval.parse('chr1:100')
            GenomicInterval(chr1:100)
        """
        match = re.match(
            r'^(?P<contig>[^:\s]+)(:(?P<start>[\d,]+)(-(?P<end>[\d,]+))?)?$', region.strip()
        )
        if not match:
            raise InvalidArgumentError('region is not of the form contig[:start[-end]]', region)
        if match.group('start') is None:
            return cls(match.group('contig'), 1, MAX_POSITION)
        start = int(match.group('start').replace(',', ''))
        end = start if match.group('end') is None else int(match.group('end').replace(',', ''))
        return cls(match.group('contig'), start, end)

    @property
    def key(self):
        return (self.contig, self.start, self.end)

    def __len__(self):
        return self.size()

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __lt__(self, other):
        return (self.contig or '', self.start, self.end) < (other.contig or '', other.start, other.end)

    def __repr__(self):
        return '{}({}:{}{})'.format(
            self.__class__.__name__,
            self.contig,
            self.start,
            '-' + str(self.end) if self.end != self.start else '',
        )

    def to_dict(self) -> Dict:
        return {'contig': self.contig, 'start': self.start, 'end': self.end}
