"""
Analysis functions for relation graphs.
"""

from .metrics import *
