"""
Integrated pipeline for loading, analysing and exporting relation graphs.

This module implements a pipeline class that ties the components of the
package together:
1. Loading a relation graph from an edge list
2. Checking the relation properties
3. Computing roots and equivalence classes
4. Running the breadth-first and depth-first traversals
5. Exporting the results

Steps can run in sequence or one at a time, sharing a single context.
"""

import os
import time
import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from ..core.graph import RelationGraph
from ..io.loaders import load_graph
from ..io.exporters import export_graph, export_results_json
from ..analysis.metrics import RelationMetrics
from ..pipeline_config import (PIPELINE_CONFIG, TRAVERSAL_CONFIG, GraphAnalysisError,
                               PipelineConfigError)


class PipelineStep:
    """A single step of the pipeline."""

    def __init__(self, name: str, function: Callable, enabled: bool = True, params: Dict = None):
        """
        Create a pipeline step.

        Args:
            name: Step name
            function: Callable run with the context and the params
            enabled: Whether the step runs
            params: Keyword arguments for the function
        """
        self.name = name
        self.function = function
        self.enabled = enabled
        self.params = params or {}
        self.result = None
        self.execution_time = 0
        self.status = "pending"
        self.error = None

    def execute(self, pipeline_context: Dict) -> Any:
        """
        Run the step.

        Args:
            pipeline_context: Shared pipeline context

        Returns:
            The step result, or None when the step is disabled
        """
        if not self.enabled:
            self.status = "skipped"
            return None

        try:
            self.status = "running"
            start_time = time.time()

            self.result = self.function(pipeline_context, **self.params)

            self.execution_time = time.time() - start_time
            self.status = "completed"
            return self.result

        except Exception as e:
            self.status = "failed"
            self.error = str(e)
            logging.getLogger('grapho_relations.pipeline').error(f"Error in step '{self.name}': {e}")
            raise


class PipelineConfig:
    """Pipeline configuration."""

    def __init__(self, config_dict: Dict = None, config_file: str = None):
        """
        Build a configuration from a dict and/or a JSON file.

        Values from ``config_dict`` override those read from the file.

        Args:
            config_dict: Configuration dictionary
            config_file: Path to a JSON configuration file
        """
        self.config = {}

        if config_file:
            if not os.path.exists(config_file):
                raise PipelineConfigError(f"Configuration file {config_file} not found")
            with open(config_file, 'r') as f:
                self.config = json.load(f)

        if config_dict:
            self.config.update(config_dict)

        steps = self.config.get('steps', [])
        if not isinstance(steps, list):
            raise PipelineConfigError("'steps' must be a list of step definitions")
        for step in steps:
            if not isinstance(step, dict) or 'name' not in step:
                raise PipelineConfigError(f"Invalid step definition: {step!r}")

    def get_step_config(self, step_name: str) -> Dict:
        """
        Get the parameters of a step.

        Args:
            step_name: Step name

        Returns:
            Step parameters, empty when not configured
        """
        for step in self.config.get('steps', []):
            if step['name'] == step_name:
                return step.get('params') or {}
        return {}

    def is_step_enabled(self, step_name: str) -> bool:
        """
        Check whether a step is enabled.

        Steps missing from the configuration are enabled.
        """
        for step in self.config.get('steps', []):
            if step['name'] == step_name:
                return step.get('enabled', True)
        return True

    def get_global_config(self) -> Dict:
        """Configuration without the step list."""
        config = self.config.copy()
        config.pop('steps', None)
        return config


class RelationPipeline:
    """Integrated pipeline for analysing relation graphs."""

    STEP_NAMES = [
        'load_graph',
        'check_relations',
        'compute_roots',
        'compute_equivalence_classes',
        'traverse',
        'export_results',
    ]

    def __init__(self, config: Union[Dict, PipelineConfig, str] = None,
                 graph: Optional[RelationGraph] = None):
        """
        Create a pipeline.

        Args:
            config: Configuration (dict, PipelineConfig or path to a JSON file)
            graph: Graph to analyse; when given, the load_graph step is skipped
        """
        self.context = {
            'graph': graph,               # RelationGraph under analysis
            'properties': {},             # Relation predicates
            'metrics': {},                # Counts and missing edges
            'roots': [],                  # Traversal roots
            'equivalence_classes': [],    # Partition, when an equivalence
            'traversals': {},             # Traversal orders by method
            'exports': {}                 # Written files
        }

        if isinstance(config, dict):
            self.config = PipelineConfig(config_dict=config)
        elif isinstance(config, PipelineConfig):
            self.config = config
        elif isinstance(config, str):
            self.config = PipelineConfig(config_file=config)
        else:
            self.config = PipelineConfig(config_dict=PIPELINE_CONFIG)

        for step in self.config.config.get('steps', []):
            if step['name'] not in self.STEP_NAMES:
                raise PipelineConfigError(f"Unknown pipeline step '{step['name']}'")

        self.logger = self._setup_logger()

        self.steps = []
        self._setup_steps()

        if graph is not None:
            for step in self.steps:
                if step.name == 'load_graph':
                    step.enabled = False

    def _setup_logger(self) -> logging.Logger:
        """
        Configure the pipeline logger.

        Returns:
            The configured logger
        """
        logger_config = self.config.config.get('logger', PIPELINE_CONFIG['logger'])
        level = getattr(logging, str(logger_config.get('level', 'INFO')).upper(), logging.INFO)

        logger = logging.getLogger('grapho_relations.pipeline')
        logger.setLevel(level)

        if logger_config.get('console', True) and not logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(level)

            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            console_handler.setFormatter(formatter)

            logger.addHandler(console_handler)

        return logger

    def _setup_steps(self):
        """Create the pipeline steps."""
        functions = {
            'load_graph': self._load_graph,
            'check_relations': self._check_relations,
            'compute_roots': self._compute_roots,
            'compute_equivalence_classes': self._compute_equivalence_classes,
            'traverse': self._traverse,
            'export_results': self._export_results,
        }
        self.steps = [
            PipelineStep(name, functions[name],
                         enabled=self.config.is_step_enabled(name),
                         params=self.config.get_step_config(name))
            for name in self.STEP_NAMES
        ]

    def run(self) -> Dict:
        """
        Run every enabled step.

        Returns:
            Pipeline context with the results
        """
        self.logger.info("Starting pipeline")
        start_time = time.time()

        for step in self.steps:
            if step.enabled:
                self.logger.info(f"Running step: {step.name}")
                try:
                    step.execute(self.context)
                    self.logger.info(f"Step {step.name} finished in {step.execution_time:.2f}s")
                except Exception as e:
                    self.logger.error(f"Step {step.name} failed: {e}")
                    if self.config.config.get('stop_on_error', True):
                        break
            else:
                self.logger.info(f"Step {step.name} disabled")

        total_time = time.time() - start_time
        self.logger.info(f"Pipeline finished in {total_time:.2f}s")

        return self.context

    def run_step(self, step_name: str) -> Any:
        """
        Run a single step, whether or not it is enabled.

        Args:
            step_name: Name of the step

        Returns:
            Result of the step
        """
        for step in self.steps:
            if step.name == step_name:
                self.logger.info(f"Running step: {step.name}")
                enabled = step.enabled
                step.enabled = True
                try:
                    result = step.execute(self.context)
                finally:
                    step.enabled = enabled
                self.logger.info(f"Step {step.name} finished in {step.execution_time:.2f}s")
                return result

        raise PipelineConfigError(f"Unknown pipeline step '{step_name}'")

    def run_steps(self, step_names: List[str]) -> Dict:
        """
        Run the given steps in order.

        Args:
            step_names: Names of the steps

        Returns:
            Pipeline context with the results
        """
        self.logger.info(f"Running steps: {', '.join(step_names)}")
        for step_name in step_names:
            self.run_step(step_name)
        return self.context

    def _require_graph(self, context: Dict) -> RelationGraph:
        graph = context.get('graph')
        if graph is None:
            raise GraphAnalysisError("No graph loaded; run 'load_graph' or pass a graph")
        return graph

    def _load_graph(self, context: Dict, edges_path: str = None, vertices_path: str = None,
                    **kwargs) -> RelationGraph:
        """
        Load the graph into the context.

        Args:
            context: Pipeline context
            edges_path: CSV or JSON file with the edges
            vertices_path: Optional CSV file with extra vertices

        Returns:
            The loaded graph
        """
        if edges_path is None:
            raise GraphAnalysisError("load_graph needs an 'edges_path'")
        if vertices_path is not None:
            kwargs['vertices_path'] = vertices_path

        graph = load_graph(edges_path, **kwargs)
        context['graph'] = graph
        self.logger.info(f"Graph loaded: {len(graph.vertices)} vertices, {len(graph.edges)} edges")
        return graph

    def _check_relations(self, context: Dict) -> Dict:
        """Evaluate the relation predicates and basic metrics."""
        metrics = RelationMetrics(self._require_graph(context))
        context['properties'] = metrics.relation_properties()
        context['metrics'] = metrics.compute_all_metrics()

        holding = [name for name, value in context['properties'].items() if value]
        self.logger.info(f"Relation properties: {', '.join(holding) if holding else 'none'}")
        return context['properties']

    def _compute_roots(self, context: Dict) -> List:
        roots = self._require_graph(context).roots()
        context['roots'] = roots
        self.logger.info(f"{len(roots)} roots found")
        return roots

    def _compute_equivalence_classes(self, context: Dict) -> List[List]:
        graph = self._require_graph(context)
        classes = graph.equivalence_classes()
        context['equivalence_classes'] = classes
        if classes:
            self.logger.info(f"{len(classes)} equivalence classes found")
        else:
            self.logger.info("Graph is not an equivalence relation")
        return classes

    def _traverse(self, context: Dict, methods: List[str] = None,
                  verify_consistency: bool = True) -> Dict:
        """
        Run the traversals.

        Args:
            context: Pipeline context
            methods: Names of RelationGraph traversal methods
            verify_consistency: Check that variants of the same search agree

        Returns:
            Traversal orders keyed by method name
        """
        graph = self._require_graph(context)
        methods = methods or TRAVERSAL_CONFIG['methods']

        traversals = {}
        for method in methods:
            if not method.endswith('_first_search') or not hasattr(graph, method):
                raise PipelineConfigError(f"Unknown traversal '{method}'")
            traversals[method] = getattr(graph, method)()

        if verify_consistency:
            for kind in ('breadth_first_search', 'depth_first_search'):
                orders = [order for name, order in traversals.items() if name.endswith(kind)]
                if any(order != orders[0] for order in orders[1:]):
                    raise GraphAnalysisError(f"Traversal variants disagree for {kind}")

        context['traversals'] = traversals
        return traversals

    def _export_results(self, context: Dict, output_directory: str = 'output/results',
                        formats: List[str] = None, base_name: str = None) -> Dict:
        """
        Export the graph and the results.

        Args:
            context: Pipeline context
            output_directory: Output directory
            formats: Subset of 'csv' (graph) and 'json' (results)
            base_name: Prefix of the output files

        Returns:
            Paths of the written files
        """
        graph = self._require_graph(context)
        formats = formats or ['csv', 'json']
        base_name = base_name or graph.name or 'graph'

        exports = {}
        if 'csv' in formats:
            exports.update(export_graph(graph, output_directory, base_name=base_name))
        if 'json' in formats:
            path = os.path.join(output_directory, f"{base_name}_results.json")
            exports['results'] = export_results_json(self.results_summary(), path)

        context['exports'] = exports
        self.logger.info(f"Results exported to {output_directory}")
        return exports

    def results_summary(self) -> Dict:
        """JSON-serialisable view of the analysis results."""
        graph = self.context.get('graph')
        return {
            'graph': repr(graph) if graph is not None else None,
            'properties': self.context.get('properties', {}),
            'metrics': self.context.get('metrics', {}),
            'roots': [str(v) for v in self.context.get('roots', [])],
            'equivalence_classes': [[str(v) for v in members]
                                    for members in self.context.get('equivalence_classes', [])],
            'traversals': {name: [str(v) for v in order]
                           for name, order in self.context.get('traversals', {}).items()},
        }

    def save_context(self, file_path: str) -> None:
        """
        Save the pipeline state to a JSON file.

        Args:
            file_path: Path of the output file
        """
        state = {
            'timestamp': datetime.now().isoformat(),
            'config': self.config.config,
            'steps': [
                {
                    'name': step.name,
                    'enabled': step.enabled,
                    'status': step.status,
                    'execution_time': step.execution_time,
                    'error': step.error
                }
                for step in self.steps
            ],
            'results': self.results_summary(),
            'exports': self.context.get('exports', {})
        }

        with open(file_path, 'w') as f:
            json.dump(state, f, indent=2)

        self.logger.info(f"Pipeline context saved to {file_path}")
