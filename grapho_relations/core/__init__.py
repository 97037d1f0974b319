"""
Core functionality for Grapho Relations.

This module contains the relation graph and the sequential
containers its traversals are built on.
"""

from .graph import *
from .data_model import *
