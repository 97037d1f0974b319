"""
Pipeline module for analysing relation graphs.

This module provides the step runner that loads a graph, checks its
relation properties, runs the traversals and exports the results.
"""

from .pipeline import PipelineStep, PipelineConfig, RelationPipeline

__all__ = ['PipelineStep', 'PipelineConfig', 'RelationPipeline']
