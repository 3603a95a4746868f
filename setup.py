#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="tila",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="capture keyboard events from xinput devices into a timestamped log, and decode them later",
    long_description="tila runs one xinput test process per matching keyboard, merges their output into a timestamped log, and decodes finished logs back into text.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: System :: Logging",
    ],
    keywords=[
        # eg: 'keyword1', 'keyword2', 'keyword3',
    ],
    python_requires=">=3.11",
    install_requires=[
        "cattrs>=22.1.0",
        "msgspec",
        "trio>=0.25.0",
        "tricycle>=0.2.1",
    ],
    tests_require=["pytest>=6.2.4", "pytest-trio>=0.8.0", "trio-util>=0.7.0"],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio>=0.8.0", "trio-util>=0.7.0"],
    },
    entry_points={
        "console_scripts": [
            "tila=tila.app:main",
        ],
    },
)
