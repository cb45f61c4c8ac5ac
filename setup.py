#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="vdc_export",
    version="0.0.1",
    description="Export stored measurements from a Veroval duo control blood pressure monitor",
    packages=find_packages(include=["vdc_export", "vdc_export.*"]),
    entry_points={"console_scripts": ["vdc_export = vdc_export.run:run"]},
    # fmt: off
    install_requires=[
        "backoff",
        "pandas",
        "pyserial"
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock"
        ]
    },
    # fmt: on
    include_package_data=True,
)
