import os

import pycodestyle

BASEPATH = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


class TestCodeFormat:
    def test_conformance(self):
        """Test that we conform to PEP-8."""
        style = pycodestyle.StyleGuide(config_file=os.path.join(BASEPATH, 'setup.cfg'))
        result = style.check_files(
            [os.path.join(BASEPATH, 'src', 'callinfo'), os.path.join(BASEPATH, 'tests')]
        )
        assert result.total_errors == 0, 'Found code style errors (and warnings).'
