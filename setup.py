# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
import os
import re

from setuptools import find_packages, setup

# read the version string from flowqc without importing it. See the
# link for a more detailed description of the problem and the solution
# https://stackoverflow.com/questions/2058802/how-can-i-get-the-version-defined-in-setup-py-setuptools-in-my-package
with open(os.path.join("flowqc", "version.py"), "r") as fh:
    version = re.search(r'^__version__ = "(.+)"$', fh.read(), re.M).group(1)

with open("README.md", "r") as fh:
    long_description = fh.read()


name = os.environ.get("PYPI_PKG_NAME", "flowqc")
if not name:
    raise ValueError("Environment variable PYPI_PKG_NAME must not be an empty string.")


setup(
    name=name,
    version=version,
    description="Cleaning, alignment and threshold checks of river flow and rainfall series",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "docs")),
    python_requires=">=3.10",
    install_requires=[
        "Click",
        "numpy",
        "pyarrow",
        "pandas",
        "pydantic>=2",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["flowqc=flowqc.__main__:main"],
    },
)
