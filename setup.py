#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import setuptools
import sys
import toml

__minver__ = '3.10'
__slogan__ = 'A pure Python implementation of the OpenBSD bcrypt_pbkdf key derivation function.'
__topics__ = [
    'Development Status :: 3 - Alpha',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Security',
    'Topic :: Security :: Cryptography',
]
__build__ = {
    'setuptools',
    'toml',
    'wheel',
}


def get_config():
    here = pathlib.Path(__file__).parent.absolute()
    sys.path.insert(0, str(here))

    import bcrypt_pbkdf

    def get_setup_readme(filename: str | pathlib.Path | None = None):
        if filename is None:
            filename = here.joinpath('README.md')
        with open(filename, 'r', encoding='UTF8') as README:
            return README.read()

    def get_setup_common() -> dict:
        return dict(
            version=bcrypt_pbkdf.__version__,
            long_description=get_setup_readme(),
            description=__slogan__,
            long_description_content_type='text/markdown',
            python_requires=F'>={__minver__}',
            classifiers=__topics__,
        )

    ppcfg: dict[str, dict[str, list[str]]] = toml.load(here.joinpath('pyproject.toml'))
    requirements = [
        r for r in ppcfg['build-system']['requires'] if r.split('>')[0].split('=')[0] not in __build__]
    extras = {
        'test': ['bcrypt', 'flake8'],
    }
    extras['all'] = sorted({dep for deps in extras.values() for dep in deps})

    config = get_setup_common()
    config.update(
        name=bcrypt_pbkdf.__distribution__,
        packages=setuptools.find_packages(include=('bcrypt_pbkdf*',)),
        install_requires=requirements,
        extras_require=extras,
        include_package_data=True,
    )

    return config


if __name__ == '__main__':
    setuptools.setup(**get_config())
