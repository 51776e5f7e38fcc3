import argparse

import pytest

from callinfo.constants import COLUMNS, DEFAULTS, CallInfoNamespace, WeakCallInfoNamespace
from callinfo.interval import GenomicInterval
from callinfo.util import log_arguments


class TestCallInfoNamespace:
    def test_members(self):
        nspace = CallInfoNamespace(thing=1, otherthing=2)
        assert nspace.thing == 1
        assert nspace.keys() == ['thing', 'otherthing']
        assert nspace.values() == [1, 2]

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            CallInfoNamespace(thing=1).other

    def test_read_only(self):
        with pytest.raises(AttributeError):
            COLUMNS.name = 'other'
        assert COLUMNS.name == 'name'

    def test_env_ignored(self, monkeypatch):
        monkeypatch.setenv('CALLINFO_THING', '5')
        assert CallInfoNamespace(thing=1).thing == 1


class TestWeakCallInfoNamespace:
    def test_env_override(self, monkeypatch):
        nspace = WeakCallInfoNamespace(thing=1, label='x')
        assert nspace.thing == 1
        monkeypatch.setenv('CALLINFO_THING', ' 5 ')
        monkeypatch.setenv('CALLINFO_LABEL', 'y')
        assert nspace.thing == 5
        assert nspace.label == 'y'
        assert nspace.values() == [5, 'y']

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv('CALLINFO_OVERLAP_MARGIN', 'ten')
        with pytest.raises(ValueError):
            DEFAULTS.overlap_margin

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv('CALLINFO_OVERLAP_MARGIN', raising=False)
        monkeypatch.delenv('CALLINFO_LOG_LEVEL', raising=False)
        assert DEFAULTS.overlap_margin == 0
        assert DEFAULTS.log_level == 'INFO'


class TestLogArguments:
    def test_log_arguments(self, caplog):
        caplog.set_level('INFO', logger='callinfo')
        log_arguments(
            argparse.Namespace(
                margin=1, inputs=['a', 'b'], single=['c'], region=GenomicInterval('chr1', 1, 2)
            )
        )
        assert ' margin = 1' in caplog.text
        assert "  'a'" in caplog.text
        assert " single = ['c']" in caplog.text
        assert ' region = GenomicInterval(chr1:1-2)' in caplog.text
