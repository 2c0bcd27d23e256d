"""Main setup file for starchart
Setup file for the starchart package

This project is using the modern pyproject.toml format and this file is only required for running:
``pip install -e .``

:Module: setup
:Copyright: (c) 2026 by the Starchart authors, see AUTHORS for more info
:License: See the LICENSE file for details
:Author: The Starchart authors
"""
from setuptools import setup

setup()
