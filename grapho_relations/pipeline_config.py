"""
Configuration of the relation analysis pipeline for Grapho Relations.

This module defines the default settings used when loading a relation
graph, running the relation checks and traversals, and exporting results:
1. Input column names and vertex ordering
2. Traversal selection and recursion headroom
3. Export formats and locations
4. The step list of the integrated pipeline
"""

# Settings for building graphs from tabular input
GRAPH_CONFIG = {
    'source_column': 'source',
    'destination_column': 'destination',
    'vertex_column': 'vertex',
    'order': 'numeric',  # numeric, natural
    'warn_dangling_edges': True
}

# Settings for the traversal step
TRAVERSAL_CONFIG = {
    'methods': [
        'iterative_breadth_first_search',
        'recursive_breadth_first_search',
        'iterative_depth_first_search',
        'recursive_depth_first_search'
    ],
    # Extra frames granted on top of the graph size for recursive variants
    'recursion_headroom': 100,
    'verify_consistency': True
}

# Settings for exporting results
EXPORT_CONFIG = {
    'output_directory': 'output/results',
    'formats': ['csv', 'json'],
    'base_name': None
}

# Settings for the integrated pipeline
PIPELINE_CONFIG = {
    'steps': [
        {'name': 'load_graph', 'enabled': True, 'params': {
            'edges_path': 'data/edges.csv',
            'vertices_path': None
        }},
        {'name': 'check_relations', 'enabled': True, 'params': None},
        {'name': 'compute_roots', 'enabled': True, 'params': None},
        {'name': 'compute_equivalence_classes', 'enabled': True, 'params': None},
        {'name': 'traverse', 'enabled': True, 'params': {
            'methods': TRAVERSAL_CONFIG['methods'],
            'verify_consistency': TRAVERSAL_CONFIG['verify_consistency']
        }},
        {'name': 'export_results', 'enabled': False, 'params': {
            'output_directory': EXPORT_CONFIG['output_directory'],
            'formats': EXPORT_CONFIG['formats']
        }}
    ],

    # General settings
    'stop_on_error': True,
    'logger': {
        'level': 'INFO',
        'console': True
    }
}


# Custom error classes
class PipelineConfigError(Exception):
    """Invalid pipeline configuration."""
    pass

class GraphLoadError(ValueError):
    """Malformed or unsupported graph input."""
    pass

class GraphAnalysisError(Exception):
    """A pipeline step could not analyse the graph."""
    pass

class EmptyContainerError(IndexError):
    """Pop, dequeue or peek on an empty container."""
    pass
