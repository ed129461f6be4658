#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import os
import re

from setuptools import find_packages, setup

# XXX: the package is not importable before its dependencies are installed, so the version is read from the file
with open(os.path.join(os.path.dirname(__file__), 'neisan', 'version.py')) as fp:
    __version__ = re.search(r"^__version__ = '([^']+)'", fp.read(), re.MULTILINE).group(1)

install_requires = [
    'colorama>=0.4',
    'pydantic>=2.0',
    'PyYAML>=6.0',
    'structlog>=22.3',
    'typing_extensions>=4.6',
]

setup(
    name='neisan',
    version=__version__,
    description='Self-describing binary codec with a registry of custom types',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.10',
    packages=find_packages(exclude=('neisan_tests', 'neisan_tests.*')),
    install_requires=install_requires,
    extras_require={
        'test': [
            'pytest>=7.0',
            'sortedcontainers>=2.4',
        ],
    },
)
