"""
Visualization functions for relation graphs.
"""

from .network import *
