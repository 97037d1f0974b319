"""
Input/output operations for relation graphs.

This module provides functions for loading graphs from edge lists
and saving graphs and analysis results.
"""

from .loaders import *
from .exporters import *
