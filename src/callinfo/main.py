#!python
import argparse
import logging
import platform
import sys
import time
from typing import Dict, List, Optional

import pandas as pd
import pysam

from . import __version__
from . import util as _util
from .annotation import AnnotationRecord
from .constants import COLUMNS, DEFAULTS, EXIT_OK, FILTER_STATUS, MISSING_VALUE, PROGNAME, SUBCOMMAND
from .convert import VariantLocus, annotation_from_variant
from .interval import GenomicInterval


def filter_status(annotation: AnnotationRecord) -> str:
    """
    Example:
        >>> filter_status(AnnotationRecord(filters=set()))
        'PASS'
    """
    if not annotation.filters_were_applied():
        return FILTER_STATUS.NOT_EVALUATED
    elif annotation.is_filtered():
        return FILTER_STATUS.FAILED
    return FILTER_STATUS.PASS


def compare_main(first: GenomicInterval, second: GenomicInterval, margin: int = 0) -> Dict:
    """
    log the size, overlap and containment of two regions
    """
    result = {
        'first_size': first.size(),
        'second_size': second.size(),
        'overlaps': first.overlaps(second),
        'overlaps_with_margin': first.overlaps_with_margin(second, margin),
        'first_contains_second': first.contains(second),
        'second_contains_first': second.contains(first),
    }
    _util.logger.info(f'comparing {first} and {second} (margin={margin})')
    for key, value in result.items():
        _util.logger.info(f' {key} = {value}')
    return result


def scan_main(
    vcf: str, output: str, region: Optional[GenomicInterval] = None, margin: int = 0
) -> pd.DataFrame:
    """
    read a VCF and write the quality and filter state of every record near the region

    Args:
        vcf: path to the input VCF (or BCF)
        output: path to the tab delimited output file
        region: only report records within margin bases of this region, all records if None
        margin: overlap margin used with the region
    """
    rows = []
    total = 0
    _util.logger.info(f'reading: {vcf}')
    with pysam.VariantFile(vcf) as fh:
        for record in fh:
            total += 1
            locus = VariantLocus(record)
            if region is not None and not locus.overlaps_with_margin(region, margin):
                continue
            annotation = annotation_from_variant(record)
            phred_qual = annotation.phred_scaled_qual if annotation.has_log10_p_error() else None
            rows.append(
                {
                    COLUMNS.contig: locus.contig,
                    COLUMNS.start: locus.start,
                    COLUMNS.end: locus.end,
                    COLUMNS.name: annotation.name,
                    COLUMNS.phred_qual: phred_qual,
                    COLUMNS.filter_status: filter_status(annotation),
                    COLUMNS.filters: ';'.join(sorted(annotation.filters)),
                }
            )
    _util.logger.info(f'kept {len(rows)} of {total} records')
    df = pd.DataFrame.from_records(rows, columns=COLUMNS.values())
    df = df.fillna(MISSING_VALUE)
    _util.logger.info(f'writing: {output}')
    df.to_csv(output, columns=COLUMNS.values(), index=False, sep='\t')
    return df


def create_parser(argv):
    parser = argparse.ArgumentParser(formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    subp = parser.add_subparsers(dest='command', help='specifies which subprogram to use')
    subp.required = True
    required = {}  # hold required argument group by subparser command name
    optional = {}  # hold optional argument group by subparser command name
    for command in SUBCOMMAND.values():
        subparser = subp.add_parser(
            command, formatter_class=argparse.ArgumentDefaultsHelpFormatter, add_help=False
        )
        required[command] = subparser.add_argument_group('required arguments')
        optional[command] = subparser.add_argument_group('optional arguments')
        optional[command].add_argument(
            '-h', '--help', action='help', help='show this help message and exit'
        )
        optional[command].add_argument('--log', help='redirect stdout to a log file', default=None)
        optional[command].add_argument(
            '--log_level',
            help='level of logging to output',
            choices=['INFO', 'DEBUG'],
            default=DEFAULTS.log_level,
        )
        optional[command].add_argument(
            '--margin',
            type=int,
            default=DEFAULTS.overlap_margin,
            help='number of bases two regions may be apart and still overlap',
        )

    # compare
    required[SUBCOMMAND.COMPARE].add_argument(
        'first', type=GenomicInterval.parse, help='region given as contig:start-end'
    )
    required[SUBCOMMAND.COMPARE].add_argument(
        'second', type=GenomicInterval.parse, help='region given as contig:start-end'
    )

    # scan
    required[SUBCOMMAND.SCAN].add_argument(
        '--vcf', required=True, help='path to the input VCF', metavar='FILEPATH'
    )
    required[SUBCOMMAND.SCAN].add_argument(
        '-o', '--output', required=True, help='path to the output file', metavar='FILEPATH'
    )
    optional[SUBCOMMAND.SCAN].add_argument(
        '--region',
        type=GenomicInterval.parse,
        default=None,
        help='only report records overlapping this region (contig[:start[-end]])',
    )
    return parser, parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser and redirects into the subcommand main functions

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {
        'format': '{asctime} [{levelname}] {message}',
        'style': '{',
        'level': args.log_level,
    }

    original_logging_handlers = logging.root.handlers[:]
    for handler in original_logging_handlers:
        logging.root.removeHandler(handler)
    if args.log:
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'{PROGNAME}: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    try:
        if args.command == SUBCOMMAND.COMPARE:
            compare_main(args.first, args.second, margin=args.margin)
        else:
            scan_main(args.vcf, args.output, region=args.region, margin=args.margin)
        duration = int(time.time()) - start_time
        _util.logger.info(f'run time (s): {duration}')
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            handler.close()
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
