# Sphinx configuration for the bedutils docs.
#
# Build with:  sphinx-build -b html doc/source doc/build
import os
import sys
sys.path.insert(0, os.path.abspath('../..'))
import bedutils
import sphinx_rtd_theme

project = 'bedutils'
copyright = '2026, bedutils developers'
author = 'bedutils developers'
version = bedutils.__version__
release = bedutils.__version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.doctest',
    'sphinx.ext.viewcode',
    'autoapi.extension',
    'sphinx_rtd_theme',
]

# Module docstrings use numpy-style "Parameters" / "Returns" sections.
napoleon_numpy_docstring = True
napoleon_google_docstring = False

# index.rst pulls in the API by hand; autoapi only indexes the package.
autoapi_dirs = ['../../bedutils']
autoapi_ignore = ['*/test/*']
autoapi_generate_api_docs = False

doctest_global_setup = """
import bedutils
from bedutils import bedwriter, naming
"""

master_doc = 'index'
default_role = 'literal'
pygments_style = 'sphinx'
exclude_patterns = ['_build']
html_theme = 'sphinx_rtd_theme'
