"""
module holding the constants and controlled vocabularies used throughout the callinfo package
"""
import os

PROGNAME: str = 'callinfo'
EXIT_OK: int = 0

NO_LOG10_PERROR: float = 1.0
"""sentinel log10 error probability meaning that no error estimate is present"""

MISSING_VALUE: str = '.'
"""token used by the VCF encoding for a missing value"""


class CallInfoNamespace:
    """
    read-only set of named constants

    Example:
        >>> nspace = CallInfoNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> nspace.values()
        [1, 2]
    """

    def __init__(self, **members):
        object.__setattr__(self, '_members', dict(members))

    def __getattr__(self, attr):
        members = object.__getattribute__(self, '_members')
        if attr not in members:
            raise AttributeError(attr)
        return members[attr]

    def __setattr__(self, attr, val):
        raise AttributeError('namespace members cannot be reassigned', attr)

    def keys(self):
        return list(self._members)

    def values(self):
        return [getattr(self, k) for k in self._members]


class WeakCallInfoNamespace(CallInfoNamespace):
    """
    namespace where each member may be overridden by the environment variable CALLINFO_<MEMBER>.
    The variable is cast to the type of the default value
    """

    @staticmethod
    def get_env_name(attr: str) -> str:
        """
        Example:
            >>> WeakCallInfoNamespace.get_env_name('overlap_margin')
            'CALLINFO_OVERLAP_MARGIN'
        """
        return '{}_{}'.format(PROGNAME, attr).upper()

    def __getattr__(self, attr):
        default = super().__getattr__(attr)
        env = os.environ.get(self.get_env_name(attr))
        if env is None:
            return default
        return type(default)(env.strip())


FILTER = CallInfoNamespace(PASS='PASS')
"""
holds the reserved filter tokens

Attributes:
    PASS: the record was filtered and passed all filters
"""

FILTER_STATUS = CallInfoNamespace(NOT_EVALUATED='not_evaluated', PASS=FILTER.PASS, FAILED='failed')

SUBCOMMAND = CallInfoNamespace(COMPARE='compare', SCAN='scan')

COLUMNS = CallInfoNamespace(
    contig='contig',
    start='start',
    end='end',
    name='name',
    phred_qual='phred_qual',
    filter_status='filter_status',
    filters='filters',
)

DEFAULTS = WeakCallInfoNamespace(overlap_margin=0, log_level='INFO')
"""
defaults for the command line, each may be set from the environment, for example CALLINFO_OVERLAP_MARGIN=10
"""
