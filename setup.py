import os
import sys
from setuptools import setup

version_py = os.path.join(os.path.dirname(__file__), 'bedutils', 'version.py')
version = open(version_py).read().strip().split('=')[-1].replace('"', '')
requirements = open(os.path.join(os.path.dirname(__file__), 'requirements.txt')).readlines()
setup(
    name='bedutils',
    version=version,
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
        'doc': ['sphinx', 'sphinx_rtd_theme', 'sphinx-autoapi'],
    },
    packages=['bedutils', 'bedutils.test'],
    author='bedutils developers',
    package_dir={'bedutils': 'bedutils'},
    package_data = {'bedutils': ['test/data/*']},
    description="Convert genomic features and transcripts "
    "into BED and BED12 lines",
    long_description=open("README.rst").read(),
    classifiers=[
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Software Development :: Libraries :: Python Modules',
    ],
)
