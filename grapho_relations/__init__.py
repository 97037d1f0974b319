"""
Grapho Relations - A Python package for analysing directed graphs as binary relations.
"""

__version__ = '0.1.0'

# Import main submodules for easy access
from . import core
from . import io
from . import analysis
from . import pipeline
from . import visualization
from . import utils

from .core.graph import Edge, RelationGraph
