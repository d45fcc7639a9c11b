#!/usr/bin/env python3

"""cycletimer setup script"""

from setuptools import setup

setup(
    name='cycletimer',
    setup_requires=['pbr>=1.9', 'setuptools>=17.1'],
    python_requires='>=3.8',
    pbr=True
)
