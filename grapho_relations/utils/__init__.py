"""
Utility functions for the Grapho Relations package.

This module provides general utility functions used
throughout the package.
"""

from .ordering import *
