"""
Setuptools setup script for control_recorder, the CSV recorder for control
runtime snapshots.

Dependencies are read from requirements.txt / requirements-dev.txt and the
version is parsed from control_recorder/__init__.py so the package does not
need to be importable at build time.
"""

import pathlib
import re

import setuptools

HERE = pathlib.Path(__file__).parent
PACKAGE_DIR = HERE / 'control_recorder'
README_PATH = HERE / 'README.md'
REQUIREMENTS_PATH = HERE / 'requirements.txt'
DEV_REQUIREMENTS_PATH = HERE / 'requirements-dev.txt'

PACKAGE_NAME = 'control-recorder'
AUTHOR = 'control_recorder Development Team'
DESCRIPTION = 'Buffered CSV recorder for control loop, state machine and rule snapshots'
LICENSE = 'MIT'

KEYWORDS = ['control systems', 'pid', 'csv', 'data logging', 'recorder']

CLASSIFIERS = [
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Developers',
    'Topic :: Scientific/Engineering',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3',
    'Programming Language :: Python :: 3.10',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
    'Programming Language :: Python :: 3.13',
]


def read_requirements(requirements_file: pathlib.Path) -> list:
    """
    Read a requirements file, skipping blank lines and comments.

    Returns an empty list when the file does not exist.
    """
    if not requirements_file.exists():
        return []

    requirements = []
    for line in requirements_file.read_text(encoding='utf-8').splitlines():
        line = line.split('#')[0].strip()
        if line:
            requirements.append(line)
    return requirements


def read_long_description() -> str:
    if README_PATH.exists():
        return README_PATH.read_text(encoding='utf-8')
    return DESCRIPTION


def get_version_from_package() -> str:
    """
    Parse ``__version__`` from the package __init__.py without importing it.
    """
    init_text = (PACKAGE_DIR / '__init__.py').read_text(encoding='utf-8')
    match = re.search(r'^__version__\s*=\s*[\'"]([^\'"]+)[\'"]', init_text, re.M)
    if not match:
        raise RuntimeError('Unable to find __version__ in control_recorder/__init__.py')
    return match.group(1)


def setup_package():
    install_requires = read_requirements(REQUIREMENTS_PATH) or [
        'pydantic>=2.5.0',
        'loguru>=0.7.0',
        'omegaconf>=2.3.0',
        'PyYAML>=6.0',
        'typing_extensions>=4.8.0',
    ]
    test_requirements = read_requirements(DEV_REQUIREMENTS_PATH) or [
        'pytest>=8.0.0',
        'hypothesis>=6.90.0',
    ]

    setuptools.setup(
        name=PACKAGE_NAME,
        version=get_version_from_package(),
        description=DESCRIPTION,
        long_description=read_long_description(),
        long_description_content_type='text/markdown',
        author=AUTHOR,
        license=LICENSE,
        keywords=KEYWORDS,
        classifiers=CLASSIFIERS,
        packages=setuptools.find_packages(include=['control_recorder', 'control_recorder.*']),
        install_requires=install_requires,
        extras_require={
            'test': test_requirements,
            'dev': test_requirements + ['pytest-cov>=4.0.0'],
        },
        entry_points={
            'console_scripts': [
                'control-recorder-keys=control_recorder.cli.keys:main',
            ]
        },
        python_requires='>=3.10',
        zip_safe=False,
    )


if __name__ == '__main__':
    setup_package()
