import sys
from unittest.mock import patch

import pandas as pd
import pysam
import pytest

from callinfo.annotation import AnnotationRecord
from callinfo.constants import COLUMNS, FILTER_STATUS, SUBCOMMAND
from callinfo.interval import GenomicInterval
from callinfo.main import compare_main, filter_status, main


@pytest.fixture
def vcf_file(tmp_path):
    header = pysam.VariantHeader()
    header.add_meta('fileformat', 'VCFv4.2')
    header.contigs.add('chr1', length=10000)
    header.contigs.add('chr2', length=10000)
    header.filters.add('LowQual', None, None, 'Low quality')
    header.info.add('DP', 1, 'Integer', 'Total depth')

    path = tmp_path / 'calls.vcf'
    with pysam.VariantFile(str(path), 'w', header=header) as vcf:
        passed = vcf.new_record(
            contig='chr1', start=99, stop=100, alleles=('A', 'G'), id='rs1', qual=60, filter='PASS'
        )
        passed.info['DP'] = 20
        vcf.write(passed)
        failed = vcf.new_record(
            contig='chr1', start=499, stop=500, alleles=('C', 'T'), qual=3, filter='LowQual'
        )
        vcf.write(failed)
        unfiltered = vcf.new_record(contig='chr2', start=99, stop=100, alleles=('G', 'A'))
        vcf.write(unfiltered)
    return path


class TestHelpMenu:
    @pytest.mark.parametrize('argv', [['-h'], [SUBCOMMAND.COMPARE, '-h'], [SUBCOMMAND.SCAN, '-h']])
    def test_help(self, argv):
        with patch.object(sys, 'argv', ['callinfo'] + argv):
            try:
                returncode = main()
            except SystemExit as err:
                assert err.code == 0
            else:
                assert returncode == 0

    def test_bad_region(self):
        with pytest.raises(SystemExit) as err:
            main([SUBCOMMAND.COMPARE, 'chr1:200-100', 'chr1:1-2'])
        assert err.value.code != 0


class TestFilterStatus:
    def test_status(self):
        assert filter_status(AnnotationRecord()) == FILTER_STATUS.NOT_EVALUATED
        assert filter_status(AnnotationRecord(filters=set())) == FILTER_STATUS.PASS
        assert filter_status(AnnotationRecord(filters={'LowQual'})) == FILTER_STATUS.FAILED


class TestCompare:
    def test_compare(self):
        result = compare_main(GenomicInterval('chr1', 100, 200), GenomicInterval('chr1', 201, 210), margin=1)
        assert result['first_size'] == 101
        assert not result['overlaps']
        assert result['overlaps_with_margin']
        assert not result['first_contains_second']

    def test_main(self, tmp_path):
        log = tmp_path / 'compare.log'
        assert main([SUBCOMMAND.COMPARE, 'chr1:100-200', 'chr1:120-150', '--log', str(log)]) == 0
        content = log.read_text()
        assert 'first_contains_second = True' in content
        assert 'second_contains_first = False' in content


class TestScan:
    def test_all_records(self, vcf_file, tmp_path):
        output = tmp_path / 'out.tab'
        assert main([SUBCOMMAND.SCAN, '--vcf', str(vcf_file), '-o', str(output)]) == 0
        df = pd.read_csv(output, sep='\t', dtype=str, keep_default_na=False)
        assert list(df.columns) == COLUMNS.values()
        assert df.shape[0] == 3
        assert df[COLUMNS.filter_status].tolist() == [
            FILTER_STATUS.PASS,
            FILTER_STATUS.FAILED,
            FILTER_STATUS.NOT_EVALUATED,
        ]
        assert df[COLUMNS.filters].tolist() == ['', 'LowQual', '']
        assert df[COLUMNS.name].tolist() == ['rs1', '.', '.']
        assert df[COLUMNS.phred_qual].tolist() == ['60.0', '3.0', '.']

    def test_region(self, vcf_file, tmp_path):
        output = tmp_path / 'out.tab'
        main([SUBCOMMAND.SCAN, '--vcf', str(vcf_file), '-o', str(output), '--region', 'chr1:90-99'])
        df = pd.read_csv(output, sep='\t', dtype=str, keep_default_na=False)
        assert df.shape[0] == 0

    def test_region_with_margin(self, vcf_file, tmp_path):
        output = tmp_path / 'out.tab'
        main(
            [
                SUBCOMMAND.SCAN,
                '--vcf',
                str(vcf_file),
                '-o',
                str(output),
                '--region',
                'chr1:90-99',
                '--margin',
                '1',
            ]
        )
        df = pd.read_csv(output, sep='\t', dtype=str, keep_default_na=False)
        assert df[COLUMNS.name].tolist() == ['rs1']

    def test_env_margin(self, vcf_file, tmp_path, monkeypatch):
        monkeypatch.setenv('CALLINFO_OVERLAP_MARGIN', '1')
        output = tmp_path / 'out.tab'
        main([SUBCOMMAND.SCAN, '--vcf', str(vcf_file), '-o', str(output), '--region', 'chr1:90-99'])
        df = pd.read_csv(output, sep='\t', dtype=str, keep_default_na=False)
        assert df.shape[0] == 1
