import os
import re

from setuptools import find_packages, setup


def get_version():
    with open(os.path.join(os.path.dirname(__file__), 'src', 'callinfo', '__init__.py')) as fh:
        return re.search(r"^__version__ = '([^']+)'", fh.read(), re.MULTILINE).group(1)


def parse_readme():
    try:
        with open('README.md') as fh:
            return fh.read()
    except OSError:
        return ''


TEST_REQS = [
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'numpy>=1.13.1',
    'pandas>=1.1',
    'pysam>=0.15',
]


setup(
    name='callinfo',
    version=get_version(),
    package_dir={'': 'src'},
    packages=find_packages(where='src', exclude=['tests']),
    description='Annotation records and the interval contract for variant and genotype calls',
    long_description=parse_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS,
    },
    python_requires='>=3.7',
    test_suite='tests',
    entry_points={'console_scripts': ['callinfo = callinfo.main:main']},
)
